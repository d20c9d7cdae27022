"""
Cost Code Entity - classification tag joining budget lines to actuals.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CostCode:
    """
    Cost code as stored.

    Attributes:
        id: Store identifier
        code: Short code, e.g. 'ELEC-L'
        name: Display name
        category: Stored category string (not necessarily canonical)
        trade_id: Owning trade, None for trade-less codes
    """

    id: str
    code: str = ""
    name: str = ""
    category: str = "other"
    trade_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> 'CostCode':
        return cls(
            id=str(row['id']),
            code=row.get('code') or '',
            name=row.get('name') or '',
            category=row.get('category') or 'other',
            trade_id=row.get('trade_id'),
        )


@dataclass(frozen=True)
class CostCodeDraft:
    """A cost code proposed by the generator, not yet persisted."""

    code: str
    name: str
    category: str
    trade_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'code': self.code,
            'name': self.name,
            'category': self.category,
            'trade_id': self.trade_id,
        }
