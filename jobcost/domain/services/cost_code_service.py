"""
Cost Code Service - persists generated cost codes.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from jobcost.config import get_config
from jobcost.infrastructure.repositories import CostCodeRepository
from jobcost.domain.entities import CostCodeDraft
from .cost_code_generator import missing_costcodes

logger = logging.getLogger(__name__)


class CostCodeService:
    """Fills in the standard cost codes each trade should have."""

    def __init__(self, session: Session):
        self.session = session
        self.repo = CostCodeRepository(session)

    @staticmethod
    def standard_trades() -> List[dict]:
        """Configured standard trades as {key, name} dicts."""
        return list(get_config().standard_trades)

    def plan_missing(self) -> List[CostCodeDraft]:
        """Drafts that generate_missing() would create."""
        return missing_costcodes(self.repo.list_trades(), self.repo.list_codes())

    def generate_missing(self, dry_run: bool = False) -> List[CostCodeDraft]:
        """
        Create every missing trade and misc cost code.

        Args:
            dry_run: Only plan; nothing is written

        Returns:
            The drafts that were (or, for a dry run, would be) persisted
        """
        drafts = self.plan_missing()
        if dry_run:
            logger.info(f"Dry run: {len(drafts)} cost codes would be generated")
            return drafts

        try:
            for draft in drafts:
                self.repo.create(draft)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Generated {len(drafts)} cost codes")
        return drafts
