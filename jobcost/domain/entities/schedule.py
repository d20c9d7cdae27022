"""
Schedule Entities - scheduled shifts and worker double-booking conflicts.
"""
import datetime
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from .cost_record import ZERO, to_decimal, parse_date


@dataclass(frozen=True)
class ScheduledShift:
    """A worker booked on a project for a date."""

    worker_id: str
    project_id: str
    scheduled_date: datetime.date
    scheduled_hours: Decimal = ZERO
    worker_name: Optional[str] = None
    project_name: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> Optional['ScheduledShift']:
        """
        Build a shift from a store row.

        Returns None for rows without a worker or a parseable date;
        such rows cannot conflict with anything.
        """
        scheduled_date = parse_date(row.get('scheduled_date'))
        if not row.get('worker_id') or scheduled_date is None:
            return None
        return cls(
            worker_id=str(row['worker_id']),
            project_id=str(row.get('project_id') or ''),
            scheduled_date=scheduled_date,
            scheduled_hours=to_decimal(row.get('scheduled_hours')),
            worker_name=row.get('worker_name'),
            project_name=row.get('project_name'),
            id=str(row['id']) if row.get('id') is not None else None,
        )


@dataclass
class WorkerConflict:
    """More than one shift for the same worker on the same date."""

    worker_id: str
    date: datetime.date
    worker_name: Optional[str] = None
    shift_ids: List[str] = field(default_factory=list)
    project_ids: List[str] = field(default_factory=list)
    project_names: List[str] = field(default_factory=list)
    total_hours: Decimal = ZERO

    @property
    def shift_count(self) -> int:
        return len(self.shift_ids)

    @property
    def cross_project(self) -> bool:
        return len(set(self.project_ids)) > 1

    def to_dict(self) -> dict:
        return {
            'worker_id': self.worker_id,
            'worker_name': self.worker_name,
            'date': self.date.isoformat(),
            'shift_count': self.shift_count,
            'shift_ids': list(self.shift_ids),
            'project_ids': list(self.project_ids),
            'project_names': list(self.project_names),
            'total_hours': float(self.total_hours),
            'cross_project': self.cross_project,
        }
