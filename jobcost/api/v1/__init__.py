"""
API v1 - REST endpoints for job cost rollups.

- Ledger endpoints (budget vs actual per project)
- Labor endpoints (unpaid labor)
- Report endpoints (weekly company hours)
- Schedule endpoints (worker conflicts)
- Cost code endpoints (suggest, generate)
"""
from fastapi import APIRouter

from .ledger import router as ledger_router
from .labor import router as labor_router
from .reports import router as reports_router
from .schedule import router as schedule_router
from .cost_codes import router as cost_codes_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(ledger_router, prefix="/projects", tags=["Ledger"])
api_router.include_router(labor_router, prefix="/labor", tags=["Labor"])
api_router.include_router(reports_router, prefix="/reports", tags=["Reports"])
api_router.include_router(schedule_router, prefix="/schedule", tags=["Schedule"])
api_router.include_router(cost_codes_router, prefix="/cost-codes", tags=["Cost Codes"])
