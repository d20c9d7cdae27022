"""
Schedule Conflict Detection - workers booked more than once on a date.
"""
import logging
from collections import defaultdict
from datetime import date
from typing import Iterable, List

from jobcost.domain.entities import ScheduledShift, WorkerConflict

logger = logging.getLogger(__name__)


def find_worker_conflicts(shifts: Iterable[ScheduledShift]) -> List[WorkerConflict]:
    """
    Find (worker, date) pairs with more than one scheduled shift.

    Args:
        shifts: Shifts in any order

    Returns:
        Conflicts sorted by date, then worker id
    """
    grouped = defaultdict(list)
    for shift in shifts:
        grouped[(shift.worker_id, shift.scheduled_date)].append(shift)

    conflicts = []
    for (worker_id, scheduled_date), day_shifts in grouped.items():
        if len(day_shifts) < 2:
            continue

        conflict = WorkerConflict(
            worker_id=worker_id,
            date=scheduled_date,
            worker_name=next((s.worker_name for s in day_shifts if s.worker_name), None),
        )
        for shift in day_shifts:
            conflict.shift_ids.append(shift.id or "")
            conflict.total_hours += shift.scheduled_hours
            if shift.project_id not in conflict.project_ids:
                conflict.project_ids.append(shift.project_id)
                conflict.project_names.append(shift.project_name or "")
        conflicts.append(conflict)

    conflicts.sort(key=lambda c: (c.date, c.worker_id))
    if conflicts:
        logger.info(f"Found {len(conflicts)} worker schedule conflicts")
    return conflicts


def conflicts_for_worker(
    shifts: Iterable[ScheduledShift],
    worker_id: str,
    on_date: date,
) -> List[ScheduledShift]:
    """Existing shifts that a new booking for this worker and date would overlap."""
    return [
        s for s in shifts
        if s.worker_id == worker_id and s.scheduled_date == on_date
    ]
