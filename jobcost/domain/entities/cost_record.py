"""
Cost Record Entity - Atomic actual-cost unit fed into the rollup.

Implements:
- Immutable value semantics
- Canonical category taxonomy (labor, subs, materials, other)
- Tolerant construction from store rows (bad numbers become zero)
"""
import datetime
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class CostCategory(Enum):
    """Canonical ledger bucket."""
    LABOR = "labor"
    SUBS = "subs"
    MATERIALS = "materials"
    OTHER = "other"


class CostSource(Enum):
    """Table family a cost record was read from."""
    LABOR = "labor"        # time_logs
    SUB = "sub"            # sub_invoices
    MATERIAL = "material"  # material_receipts
    MISC = "misc"          # costs


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a store value to Decimal.

    None, unparseable and non-finite (NaN, Infinity) values become zero;
    floats go through str() so 0.1 stays 0.1.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            logger.warning(f"Non-numeric amount {value!r} treated as 0")
            return ZERO
    if not result.is_finite():
        logger.warning(f"Non-finite amount {value!r} treated as 0")
        return ZERO
    return result


def optional_decimal(value: Any) -> Optional[Decimal]:
    """Like to_decimal but keeps None (and blank strings) as None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_decimal(value)


def parse_date(value: Any) -> Optional[datetime.date]:
    """Parse an ISO date/datetime string; None when missing or malformed."""
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class CostRecord:
    """
    Immutable actual-cost entry from one of the cost sources.

    For labor records `amount` is the labor cost stored on the time log
    (may be None) and `hourly_rate` is the worker's current rate joined
    at fetch time. For every other source `amount` is the cost itself.

    Attributes:
        source: Which table family the row came from
        project_id: Owning project
        category: Raw category string as stored (normalized by the classifier)
        cost_code_id: Cost code reference, may not resolve
        amount: Monetary amount, see above
        hours: Hours worked (labor only)
        hourly_rate: Worker rate (labor only)
        date: Date incurred / worked
        payment_status: 'paid', 'unpaid', None or anything else
        worker_id: Worker (labor only)
        company_id: Paying company
        id: Store identifier of the row
    """

    source: CostSource
    project_id: Optional[str] = None
    category: Optional[str] = None
    cost_code_id: Optional[str] = None
    amount: Optional[Decimal] = None
    hours: Decimal = ZERO
    hourly_rate: Optional[Decimal] = None
    date: Optional[datetime.date] = None
    payment_status: Optional[str] = None
    worker_id: Optional[str] = None
    company_id: Optional[str] = None
    id: Optional[str] = None

    @property
    def is_labor(self) -> bool:
        return self.source is CostSource.LABOR

    def actual_amount(self, rate_source: str = "current") -> Decimal:
        """
        Monetary amount this record contributes to actuals.

        Labor cost is hours * hourly_rate computed now, so a rate edit
        changes historical totals. With rate_source='snapshot' the stored
        labor cost wins when present. A labor row without a rate falls
        back to the stored cost, then zero.

        Args:
            rate_source: 'current' or 'snapshot'
        """
        if not self.is_labor:
            return self.amount if self.amount is not None else ZERO

        if rate_source == "snapshot" and self.amount is not None:
            return self.amount
        if self.hourly_rate is not None:
            return self.hours * self.hourly_rate
        return self.amount if self.amount is not None else ZERO

    def is_paid(self, paid_statuses=("paid",)) -> bool:
        """Only an explicit paid status counts; null and unknown are unpaid."""
        if self.payment_status is None:
            return False
        return str(self.payment_status).strip().lower() in paid_statuses

    @classmethod
    def from_row(cls, row: dict, source: Union[CostSource, str],
                 source_defaults: Optional[dict] = None) -> 'CostRecord':
        """
        Create a CostRecord from a store row.

        Args:
            row: Plain dict as returned by a repository or the store client
            source: Cost source the row belongs to
            source_defaults: source value -> category used when the row has none

        Returns:
            CostRecord instance
        """
        source = CostSource(source)
        category = row.get('category')
        if not category and source_defaults:
            category = source_defaults.get(source.value)

        if source is CostSource.LABOR:
            amount = optional_decimal(row.get('labor_cost', row.get('amount')))
        else:
            amount = to_decimal(row.get('amount', row.get('total')))

        return cls(
            source=source,
            project_id=row.get('project_id'),
            category=category,
            cost_code_id=row.get('cost_code_id') or None,
            amount=amount,
            hours=to_decimal(row.get('hours_worked', row.get('hours'))),
            hourly_rate=optional_decimal(row.get('hourly_rate')),
            date=parse_date(row.get('date')),
            payment_status=row.get('payment_status'),
            worker_id=row.get('worker_id'),
            company_id=row.get('company_id'),
            id=str(row['id']) if row.get('id') is not None else None,
        )
