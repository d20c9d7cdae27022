"""
Unpaid/Outstanding Tracker - splits labor actuals by payment status.

Only the literal 'paid' status (configurable) counts as paid; null and
any other value are unpaid so money owed is never hidden.
"""
from typing import Iterable, Optional, Sequence

from jobcost.config import get_config
from jobcost.domain.entities import CostRecord, UnpaidBucket, UnpaidSummary
from jobcost.domain.exceptions import ValidationError

GROUPINGS = ("worker", "project", "company")

_GROUP_ATTRS = {
    "worker": ("worker_id", "by_worker"),
    "project": ("project_id", "by_project"),
    "company": ("company_id", "by_company"),
}


def track_unpaid(
    records: Iterable[CostRecord],
    group_by: Sequence[str] = GROUPINGS,
    rate_source: Optional[str] = None,
    paid_statuses: Optional[Iterable[str]] = None,
) -> UnpaidSummary:
    """
    Compute unpaid totals and groupings.

    Args:
        records: Labor (or sub) cost records already scoped by the caller
        group_by: Any of 'worker', 'project', 'company'
        rate_source: 'current' or 'snapshot' (defaults to config)
        paid_statuses: Statuses counting as paid (defaults to config)

    Returns:
        UnpaidSummary; groupings are computed over the unpaid subset only
    """
    unknown = [g for g in group_by if g not in _GROUP_ATTRS]
    if unknown:
        raise ValidationError("group_by", f"unknown grouping(s): {', '.join(unknown)}")

    if rate_source is None or paid_statuses is None:
        config = get_config()
        rate_source = rate_source or config.labor_rate_source
        if paid_statuses is None:
            paid_statuses = config.paid_statuses
    paid = tuple(s.lower() for s in paid_statuses)

    summary = UnpaidSummary()
    for record in records:
        amount = record.actual_amount(rate_source)

        if record.is_paid(paid):
            summary.total_paid_amount += amount
            summary.total_paid_hours += record.hours
            continue

        summary.total_unpaid_amount += amount
        summary.total_unpaid_hours += record.hours
        summary.unpaid_count += 1

        for grouping in group_by:
            attr, target = _GROUP_ATTRS[grouping]
            buckets = getattr(summary, target)
            key = getattr(record, attr)
            bucket = buckets.get(key)
            if bucket is None:
                bucket = buckets[key] = UnpaidBucket()
            bucket.add(record.hours, amount)

    return summary
