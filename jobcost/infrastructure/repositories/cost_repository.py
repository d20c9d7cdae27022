"""
Cost Repository - read-only access to every actual-cost source.

Each method returns plain row dicts in the shape CostRecord.from_row
expects. Labor rows carry the worker's *current* hourly rate, joined
at fetch time.
"""
from datetime import date
from typing import Iterable, List, Optional
from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from jobcost.models import (
    TimeLog, Worker, Project, Company, Cost, SubInvoice, MaterialReceipt,
)
from jobcost.domain.entities import RollupScope
from .base_repository import BaseRepository, cents_to_decimal


def _date_filters(column, scope: RollupScope) -> list:
    filters = []
    if scope.start_date:
        filters.append(column >= scope.start_date)
    if scope.end_date:
        filters.append(column <= scope.end_date)
    return filters


class CostRepository(BaseRepository[TimeLog]):
    """
    Repository over time_logs, costs, sub_invoices and material_receipts.

    Never writes; the rollup only reads.
    """

    def __init__(self, session: Session):
        super().__init__(session, TimeLog)

    def exists(self, **criteria) -> bool:
        query = self.session.query(TimeLog)
        for field, value in criteria.items():
            query = query.filter(getattr(TimeLog, field) == value)
        return query.first() is not None

    # =========================================================================
    # Labor
    # =========================================================================

    def labor_rows(self, scope: RollupScope) -> List[dict]:
        """
        Time logs in scope, joined with worker rate and project company.

        The company of a log is its override company, else the project's.
        """
        query = self.session.query(TimeLog, Worker, Project).outerjoin(
            Worker, TimeLog.worker_id == Worker.id
        ).outerjoin(
            Project, TimeLog.project_id == Project.id
        )

        if scope.project_id:
            query = query.filter(TimeLog.project_id == scope.project_id)
        if scope.worker_id:
            query = query.filter(TimeLog.worker_id == scope.worker_id)
        if scope.company_id:
            query = query.filter(or_(
                TimeLog.company_id == scope.company_id,
                and_(TimeLog.company_id.is_(None), Project.company_id == scope.company_id),
            ))
        for condition in _date_filters(TimeLog.date, scope):
            query = query.filter(condition)

        rows = []
        for log, worker, project in query.order_by(TimeLog.date, TimeLog.id).all():
            rows.append({
                'id': log.id,
                'project_id': log.project_id,
                'worker_id': log.worker_id,
                'company_id': log.company_id or (project.company_id if project else None),
                'cost_code_id': log.cost_code_id,
                'category': 'labor',
                'date': log.date,
                'hours_worked': log.hours_worked,
                'hourly_rate': cents_to_decimal(worker.hourly_rate_cents) if worker else None,
                'labor_cost': cents_to_decimal(log.labor_cost_cents),
                'payment_status': log.payment_status,
            })
        return rows

    # =========================================================================
    # Non-labor
    # =========================================================================

    def cost_rows(self, scope: RollupScope) -> List[dict]:
        """Rows of the costs table (subs, materials, misc, ...)."""
        query = self.session.query(Cost)
        if scope.project_id:
            query = query.filter(Cost.project_id == scope.project_id)
        if scope.company_id:
            query = query.filter(Cost.company_id == scope.company_id)
        for condition in _date_filters(Cost.date_incurred, scope):
            query = query.filter(condition)

        return [
            {
                'id': c.id,
                'project_id': c.project_id,
                'company_id': c.company_id,
                'cost_code_id': c.cost_code_id,
                'category': c.category,
                'amount': cents_to_decimal(c.amount_cents),
                'date': c.date_incurred,
                'payment_status': c.status,
            }
            for c in query.order_by(Cost.date_incurred, Cost.id).all()
        ]

    def sub_invoice_rows(self, scope: RollupScope,
                         excluded_statuses: Iterable[str] = ("rejected",)) -> List[dict]:
        """Sub invoices in scope, minus those in an excluded payment status."""
        query = self.session.query(SubInvoice)
        excluded = [s.lower() for s in excluded_statuses]
        if excluded:
            query = query.filter(or_(
                SubInvoice.payment_status.is_(None),
                func.lower(SubInvoice.payment_status).notin_(excluded),
            ))
        if scope.project_id:
            query = query.filter(SubInvoice.project_id == scope.project_id)
        if scope.company_id:
            query = query.join(Project, SubInvoice.project_id == Project.id).filter(
                Project.company_id == scope.company_id
            )
        for condition in _date_filters(SubInvoice.invoice_date, scope):
            query = query.filter(condition)

        return [
            {
                'id': inv.id,
                'project_id': inv.project_id,
                'cost_code_id': inv.cost_code_id,
                'category': 'subs',
                'amount': cents_to_decimal(inv.total_cents),
                'date': inv.invoice_date,
                'payment_status': inv.payment_status,
            }
            for inv in query.order_by(SubInvoice.invoice_date, SubInvoice.id).all()
        ]

    def material_receipt_rows(self, scope: RollupScope) -> List[dict]:
        """Receipts not already linked to a cost row."""
        query = self.session.query(MaterialReceipt).filter(
            MaterialReceipt.linked_cost_id.is_(None)
        )
        if scope.project_id:
            query = query.filter(MaterialReceipt.project_id == scope.project_id)
        if scope.company_id:
            query = query.join(Project, MaterialReceipt.project_id == Project.id).filter(
                Project.company_id == scope.company_id
            )
        for condition in _date_filters(MaterialReceipt.receipt_date, scope):
            query = query.filter(condition)

        return [
            {
                'id': r.id,
                'project_id': r.project_id,
                'cost_code_id': r.cost_code_id,
                'category': 'materials',
                'amount': cents_to_decimal(r.total_cents),
                'date': r.receipt_date,
            }
            for r in query.order_by(MaterialReceipt.receipt_date, MaterialReceipt.id).all()
        ]

    # =========================================================================
    # Reporting
    # =========================================================================

    def weekly_hours_rows(self, start: date, end: date,
                          company_id: Optional[str] = None) -> List[dict]:
        """Time logs in [start, end] with worker, project and company names, date-ordered."""
        query = self.session.query(TimeLog, Worker, Project, Company).outerjoin(
            Worker, TimeLog.worker_id == Worker.id
        ).outerjoin(
            Project, TimeLog.project_id == Project.id
        ).outerjoin(
            Company, Project.company_id == Company.id
        ).filter(
            TimeLog.date >= start, TimeLog.date <= end
        )
        if company_id:
            query = query.filter(Project.company_id == company_id)

        return [
            {
                'date': log.date,
                'hours_worked': log.hours_worked,
                'worker_name': worker.name if worker else None,
                'project_name': project.name if project else None,
                'company_name': company.name if company else None,
            }
            for log, worker, project, company in query.order_by(TimeLog.date, TimeLog.id).all()
        ]
