"""
Schedule API Endpoints - worker double-booking detection.

Implements:
- GET /api/v1/schedule/conflicts - Workers with more than one shift on a date
"""
import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from jobcost.models import get_db
from jobcost.domain.services import ProjectRollupService
from jobcost.domain.exceptions import InvalidScopeError

router = APIRouter()


class WorkerConflictResponse(BaseModel):
    worker_id: str
    worker_name: Optional[str]
    date: datetime.date
    shift_count: int
    shift_ids: List[str]
    project_ids: List[str]
    project_names: List[Optional[str]]
    total_hours: float
    cross_project: bool


class ConflictListResponse(BaseModel):
    conflicts: List[WorkerConflictResponse]
    total: int


@router.get(
    "/conflicts",
    response_model=ConflictListResponse,
    summary="List schedule conflicts",
    description="With project_id, only conflicts involving that project are returned"
)
def list_schedule_conflicts(
    start_date: datetime.date = Query(...),
    end_date: datetime.date = Query(...),
    project_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    try:
        conflicts = ProjectRollupService(db).schedule_conflicts(start_date, end_date, project_id)
    except InvalidScopeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )

    return {
        'conflicts': [c.to_dict() for c in conflicts],
        'total': len(conflicts),
    }
