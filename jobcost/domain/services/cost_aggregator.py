"""
Actual-Cost Aggregator - sums actual amount and hours per cost code and category.

Implements:
- by_code: cost_code_id, or "unassigned:<category>" when the code is missing
- by_category: canonical category totals
- Conservation: Σ by_code.amount = Σ by_category.amount = Σ record amounts

Amounts accumulate as Decimal; nothing is rounded here.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, Mapping, Optional

from jobcost.config import get_config
from jobcost.domain.entities import CostCategory, CostCode, CostRecord
from jobcost.domain.entities.cost_record import ZERO
from .cost_classifier import CostClassifier

logger = logging.getLogger(__name__)

UNASSIGNED_PREFIX = "unassigned:"


def unassigned_key(category: CostCategory) -> str:
    """Ledger key for records of a category without a cost code."""
    return f"{UNASSIGNED_PREFIX}{category.value}"


def is_unassigned_key(key: str) -> bool:
    return key.startswith(UNASSIGNED_PREFIX)


def category_from_key(key: str) -> CostCategory:
    """Category encoded in an unassigned key."""
    return CostCategory(key[len(UNASSIGNED_PREFIX):])


@dataclass
class ActualsBucket:
    """Accumulated actuals for one key."""

    amount: Decimal = ZERO
    hours: Decimal = ZERO
    count: int = 0

    def add(self, amount: Decimal, hours: Decimal) -> None:
        self.amount += amount
        self.hours += hours
        self.count += 1


@dataclass
class AggregatedActuals:
    """Output of aggregate()."""

    by_code: Dict[str, ActualsBucket] = field(default_factory=dict)
    by_category: Dict[CostCategory, ActualsBucket] = field(
        default_factory=lambda: {c: ActualsBucket() for c in CostCategory}
    )
    labor_unpaid: Decimal = ZERO
    record_count: int = 0
    unassigned_count: int = 0

    @property
    def total_amount(self) -> Decimal:
        return sum((b.amount for b in self.by_category.values()), ZERO)

    @property
    def total_hours(self) -> Decimal:
        return sum((b.hours for b in self.by_category.values()), ZERO)


def aggregate(
    records: Iterable[CostRecord],
    cost_codes: Mapping[str, CostCode],
    classifier: Optional[CostClassifier] = None,
    rate_source: Optional[str] = None,
    paid_statuses: Optional[Iterable[str]] = None,
) -> AggregatedActuals:
    """
    Aggregate actual costs in a single pass.

    Labor amounts are computed here (hours * current rate by default),
    so the result always reflects the rates passed in, not the rates
    in effect when the time was logged.

    Args:
        records: Cost records already scoped by the caller
        cost_codes: Known cost codes keyed by id
        classifier: Category normalizer (defaults to configured one)
        rate_source: 'current' or 'snapshot' (defaults to config)
        paid_statuses: Statuses counting as paid (defaults to config)

    Returns:
        AggregatedActuals; all zero for no records
    """
    config = None
    if classifier is None or rate_source is None or paid_statuses is None:
        config = get_config()
    classifier = classifier or CostClassifier.from_config(config)
    rate_source = rate_source or config.labor_rate_source
    paid = tuple(s.lower() for s in (paid_statuses if paid_statuses is not None else config.paid_statuses))

    result = AggregatedActuals()

    for record in records:
        classification = classifier.classify(record, cost_codes)
        amount = record.actual_amount(rate_source)
        hours = record.hours

        if classification.cost_code_id is None:
            key = unassigned_key(classification.category)
            result.unassigned_count += 1
        else:
            key = classification.cost_code_id

        bucket = result.by_code.get(key)
        if bucket is None:
            bucket = result.by_code[key] = ActualsBucket()
        bucket.add(amount, hours)
        result.by_category[classification.category].add(amount, hours)

        if record.is_labor and not record.is_paid(paid):
            result.labor_unpaid += amount

        result.record_count += 1

    if result.unassigned_count:
        logger.warning(
            f"{result.unassigned_count} of {result.record_count} cost records "
            f"have no resolvable cost code"
        )

    return result
