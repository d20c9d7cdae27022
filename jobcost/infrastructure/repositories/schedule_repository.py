"""
Schedule Repository - scheduled shifts for conflict detection.
"""
from datetime import date
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from jobcost.models import ScheduledShiftEntity, Worker, Project
from .base_repository import BaseRepository


class ScheduleRepository(BaseRepository[ScheduledShiftEntity]):
    """Repository for scheduled shifts."""

    def __init__(self, session: Session):
        super().__init__(session, ScheduledShiftEntity)

    def exists(self, **criteria) -> bool:
        query = self.session.query(ScheduledShiftEntity)
        for field, value in criteria.items():
            query = query.filter(getattr(ScheduledShiftEntity, field) == value)
        return query.first() is not None

    def shift_rows(self, start: date, end: date,
                   project_id: Optional[str] = None) -> List[dict]:
        """
        Shifts in [start, end].

        With a project filter, returns every shift (on any project) of the
        workers booked on that project, so cross-project double-booking
        stays visible.
        """
        query = self.session.query(ScheduledShiftEntity, Worker, Project).outerjoin(
            Worker, ScheduledShiftEntity.worker_id == Worker.id
        ).outerjoin(
            Project, ScheduledShiftEntity.project_id == Project.id
        ).filter(
            ScheduledShiftEntity.scheduled_date >= start,
            ScheduledShiftEntity.scheduled_date <= end,
        )

        if project_id:
            worker_ids = select(ScheduledShiftEntity.worker_id).where(
                ScheduledShiftEntity.project_id == project_id,
                ScheduledShiftEntity.scheduled_date >= start,
                ScheduledShiftEntity.scheduled_date <= end,
            ).distinct()
            query = query.filter(ScheduledShiftEntity.worker_id.in_(worker_ids))

        return [
            {
                'id': shift.id,
                'worker_id': shift.worker_id,
                'worker_name': worker.name if worker else None,
                'project_id': shift.project_id,
                'project_name': project.name if project else None,
                'scheduled_date': shift.scheduled_date,
                'scheduled_hours': shift.scheduled_hours,
            }
            for shift, worker, project in query.order_by(
                ScheduledShiftEntity.scheduled_date, ScheduledShiftEntity.id
            ).all()
        ]
