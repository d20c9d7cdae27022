"""
Cost Code Repository - cost codes and trades.
"""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from jobcost.models import CostCodeEntity, Trade
from jobcost.domain.entities import CostCode, CostCodeDraft
from jobcost.domain.exceptions import DuplicateCostCodeError
from .base_repository import BaseRepository


class CostCodeRepository(BaseRepository[CostCodeEntity]):
    """Repository for cost codes; the only writer in the rollup stack."""

    def __init__(self, session: Session):
        super().__init__(session, CostCodeEntity)

    def exists(self, **criteria) -> bool:
        query = self.session.query(CostCodeEntity)
        for field, value in criteria.items():
            query = query.filter(getattr(CostCodeEntity, field) == value)
        return query.first() is not None

    def get_by_code(self, code: str) -> Optional[CostCodeEntity]:
        return self.session.query(CostCodeEntity).filter(
            CostCodeEntity.code == code
        ).first()

    def list_codes(self) -> List[CostCode]:
        """All cost codes as domain objects, ordered by code."""
        rows = self.session.query(CostCodeEntity).order_by(CostCodeEntity.code).all()
        return [
            CostCode(id=r.id, code=r.code, name=r.name, category=r.category, trade_id=r.trade_id)
            for r in rows
        ]

    def index(self) -> Dict[str, CostCode]:
        """Cost codes keyed by id, the lookup the rollup joins on."""
        return {c.id: c for c in self.list_codes()}

    def list_trades(self) -> List[dict]:
        """Trades as {id, name, key} dicts."""
        trades = self.session.query(Trade).order_by(Trade.name).all()
        return [{'id': t.id, 'name': t.name, 'key': t.key} for t in trades]

    def create(self, draft: CostCodeDraft) -> CostCodeEntity:
        """
        Persist a generated cost code.

        Raises:
            DuplicateCostCodeError: If the code is already taken
        """
        if self.exists(code=draft.code):
            raise DuplicateCostCodeError(draft.code)

        entity = CostCodeEntity(
            code=draft.code,
            name=draft.name,
            category=draft.category,
            trade_id=draft.trade_id,
            is_active=True,
        )
        self.add(entity)
        self.flush()
        return entity
