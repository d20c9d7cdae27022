"""
Labor API Endpoints - outstanding (unpaid) labor.

Implements:
- GET /api/v1/labor/unpaid - Unpaid totals with worker/project/company groupings
"""
from datetime import date
from typing import Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from jobcost.models import get_db
from jobcost.domain.entities import RollupScope
from jobcost.domain.services import ProjectRollupService, GROUPINGS
from jobcost.domain.exceptions import InvalidScopeError, ValidationError

router = APIRouter()


class UnpaidBucketResponse(BaseModel):
    hours: float
    amount: float
    count: int


class UnpaidResponse(BaseModel):
    """Unpaid labor; groupings cover unpaid logs only."""
    total_unpaid_amount: float
    total_unpaid_hours: float
    total_paid_amount: float
    total_paid_hours: float
    unpaid_count: int
    workers_count: int
    by_worker: Dict[str, UnpaidBucketResponse]
    by_project: Dict[str, UnpaidBucketResponse]
    by_company: Dict[str, UnpaidBucketResponse]


@router.get(
    "/unpaid",
    response_model=UnpaidResponse,
    summary="Get unpaid labor",
    description="Any payment status other than 'paid' (including none) counts as unpaid"
)
def get_unpaid_labor(
    project_id: Optional[str] = Query(None),
    company_id: Optional[str] = Query(None),
    worker_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    group_by: Optional[str] = Query(
        None, description="Comma-separated subset of worker,project,company"
    ),
    db: Session = Depends(get_db),
):
    """Unpaid labor for any combination of project, company, worker and dates."""
    groupings = GROUPINGS
    if group_by:
        groupings = tuple(g.strip() for g in group_by.split(",") if g.strip())

    try:
        scope = RollupScope(
            project_id=project_id,
            company_id=company_id,
            worker_id=worker_id,
            start_date=start_date,
            end_date=end_date,
        )
        summary = ProjectRollupService(db).unpaid_labor(scope, group_by=groupings)
    except (InvalidScopeError, ValidationError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )

    return {**summary.to_dict(), 'workers_count': summary.workers_count}
