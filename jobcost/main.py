"""
Main FastAPI Application for the Job Cost Ledger.
Provides the REST endpoints for rollups, reports and cost codes.
"""
import logging

from fastapi import FastAPI

from jobcost import __version__
from jobcost.models import init_db
from jobcost.api.v1 import api_router as v1_router

logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title="Job Cost Ledger",
    description="Budget-vs-actual rollups, unpaid labor and weekly reports for remodeling jobs",
    version=__version__
)

app.include_router(v1_router)


# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    init_db()
    logger.info("Database initialized")


@app.get("/health")
def health():
    """Liveness check."""
    return {"status": "ok", "version": __version__}
