"""
Cost Code API Endpoints - naming suggestions and bulk generation.

Implements:
- GET /api/v1/cost-codes/suggest - Suggested code for a trade and category
- POST /api/v1/cost-codes/generate - Create the missing standard codes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from jobcost.models import get_db
from jobcost.domain.services import CostCodeService, suggest_cost_code
from jobcost.domain.exceptions import DuplicateCostCodeError

router = APIRouter()

CATEGORY_PATTERN = "^(labor|subs|materials|equipment|other)$"


class SuggestionResponse(BaseModel):
    trade_name: Optional[str]
    category: str
    code: str


class GenerateRequest(BaseModel):
    dry_run: bool = Field(False, description="Plan only, write nothing")


class CostCodeDraftResponse(BaseModel):
    code: str
    name: str
    category: str
    trade_id: Optional[str]


class GenerateResponse(BaseModel):
    dry_run: bool
    created: List[CostCodeDraftResponse]
    total: int


@router.get(
    "/suggest",
    response_model=SuggestionResponse,
    summary="Suggest a cost code"
)
def suggest_code(
    category: str = Query(..., pattern=CATEGORY_PATTERN),
    trade_name: Optional[str] = Query(None),
):
    return {
        'trade_name': trade_name,
        'category': category,
        'code': suggest_cost_code(trade_name, category),
    }


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Generate missing cost codes",
    description="Creates {KEY}-L/-M/-S for each trade plus MISC-L/MISC-O where missing"
)
def generate_codes(
    body: Optional[GenerateRequest] = None,
    db: Session = Depends(get_db),
):
    dry_run = body.dry_run if body else False
    try:
        drafts = CostCodeService(db).generate_missing(dry_run=dry_run)
    except DuplicateCostCodeError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=e.message
        )

    return {
        'dry_run': dry_run,
        'created': [d.to_dict() for d in drafts],
        'total': len(drafts),
    }
