"""
Unpaid labor shapes produced by the outstanding tracker.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional

from .cost_record import ZERO


@dataclass
class UnpaidBucket:
    """Hours and dollars for one grouping key."""

    hours: Decimal = ZERO
    amount: Decimal = ZERO
    count: int = 0

    def add(self, hours: Decimal, amount: Decimal) -> None:
        self.hours += hours
        self.amount += amount
        self.count += 1

    def to_dict(self) -> dict:
        return {
            'hours': float(self.hours),
            'amount': float(self.amount),
            'count': self.count,
        }


@dataclass
class UnpaidSummary:
    """
    Payment-status split of labor actuals.

    Groupings are independent views over the unpaid subset; a grouping
    the caller did not request stays empty.
    """

    total_unpaid_amount: Decimal = ZERO
    total_unpaid_hours: Decimal = ZERO
    total_paid_amount: Decimal = ZERO
    total_paid_hours: Decimal = ZERO
    unpaid_count: int = 0
    by_worker: Dict[Optional[str], UnpaidBucket] = field(default_factory=dict)
    by_project: Dict[Optional[str], UnpaidBucket] = field(default_factory=dict)
    by_company: Dict[Optional[str], UnpaidBucket] = field(default_factory=dict)

    @property
    def workers_count(self) -> int:
        return len([k for k in self.by_worker if k is not None])

    def to_dict(self) -> dict:
        def _group(buckets):
            return {str(k) if k is not None else 'unassigned': v.to_dict() for k, v in buckets.items()}

        return {
            'total_unpaid_amount': float(self.total_unpaid_amount),
            'total_unpaid_hours': float(self.total_unpaid_hours),
            'total_paid_amount': float(self.total_paid_amount),
            'total_paid_hours': float(self.total_paid_hours),
            'unpaid_count': self.unpaid_count,
            'by_worker': _group(self.by_worker),
            'by_project': _group(self.by_project),
            'by_company': _group(self.by_company),
        }
