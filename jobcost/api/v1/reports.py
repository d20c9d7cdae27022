"""
Report API Endpoints - weekly company hours report.

Implements:
- GET /api/v1/reports/weekly - JSON, or the plain-text export with format=text
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from jobcost.models import get_db
from jobcost.domain.services import ProjectRollupService, render_weekly_report

router = APIRouter()


class JobHoursResponse(BaseModel):
    project: str
    hours: float


class WorkerWeekResponse(BaseModel):
    name: str
    total: float
    jobs: List[JobHoursResponse]


class CompanyWeekResponse(BaseModel):
    company: str
    company_total: float
    workers: List[WorkerWeekResponse]


class WeeklyReportResponse(BaseModel):
    week_start: date
    week_end: date
    companies: List[CompanyWeekResponse]
    grand_total: float


@router.get(
    "/weekly",
    response_model=WeeklyReportResponse,
    summary="Weekly company report",
    description="Hours per company, worker and project for the week containing week_of",
    responses={200: {"content": {"text/plain": {}}}},
)
def get_weekly_report(
    week_of: date = Query(..., description="Any date inside the week"),
    company_id: Optional[str] = Query(None),
    format: str = Query("json", pattern="^(json|text)$"),
    db: Session = Depends(get_db),
):
    report = ProjectRollupService(db).weekly_report(week_of, company_id)
    if format == "text":
        return PlainTextResponse(
            render_weekly_report(report),
            headers={
                "Content-Disposition":
                    f'attachment; filename="weekly_report_{report.week_start.isoformat()}.txt"'
            },
        )
    return report.to_dict()
