"""
Ledger API Endpoints - budget-vs-actual for a project.

Implements:
- GET /api/v1/projects/{project_id}/ledger - Ledger lines plus category summary
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from jobcost.models import get_db
from jobcost.domain.entities import RollupScope
from jobcost.domain.services import ProjectRollupService
from jobcost.domain.exceptions import (
    InvalidScopeError,
    InvariantViolationError,
    ProjectNotFoundError,
)

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================

class LedgerLineResponse(BaseModel):
    """One budget-vs-actual row. variance = actual - budget."""
    cost_code_id: Optional[str]
    code: str
    description: str
    category: str
    budget_amount: float
    budget_hours: Optional[float]
    actual_amount: float
    actual_hours: float
    variance: float
    percent_used: Optional[float]


class BudgetSummaryResponse(BaseModel):
    """Category rollup. Category variance = budget - actual."""
    labor_budget: float
    labor_actual: float
    labor_variance: float
    subs_budget: float
    subs_actual: float
    subs_variance: float
    materials_budget: float
    materials_actual: float
    materials_variance: float
    other_budget: float
    other_actual: float
    other_variance: float
    total_budget: float
    total_actual: float
    total_variance: float
    labor_unpaid: float


class LedgerResponse(BaseModel):
    project_id: str
    start_date: Optional[date]
    end_date: Optional[date]
    ledger: List[LedgerLineResponse]
    summary: BudgetSummaryResponse


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/{project_id}/ledger",
    response_model=LedgerResponse,
    summary="Get project budget-vs-actual ledger",
    description="Per cost code budget vs actual, with unassigned costs surfaced as their own lines"
)
def get_project_ledger(
    project_id: str,
    start_date: Optional[date] = Query(None, description="Inclusive lower bound for actuals"),
    end_date: Optional[date] = Query(None, description="Inclusive upper bound for actuals"),
    db: Session = Depends(get_db),
):
    """Compute the ledger for one project; budgets are never date-filtered."""
    try:
        scope = RollupScope(project_id=project_id, start_date=start_date, end_date=end_date)
        result = ProjectRollupService(db).project_ledger(scope)
    except ProjectNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except InvalidScopeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except InvariantViolationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message
        )

    return {
        'project_id': project_id,
        'start_date': start_date,
        'end_date': end_date,
        **result.to_dict(),
    }
