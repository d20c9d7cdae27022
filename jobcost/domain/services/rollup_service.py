"""
Project Rollup Service - fetches scoped rows and runs the rollup engine.

Flow per call:
  scope -> repositories (plain rows) -> CostRecord -> classify/aggregate
        -> build_ledger -> track_unpaid -> result objects

Every call is independent; nothing is cached between calls.
"""
import logging
from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from jobcost.config import get_config
from jobcost.infrastructure.repositories import (
    BudgetRepository,
    CostCodeRepository,
    CostRepository,
    ScheduleRepository,
)
from jobcost.domain.entities import (
    BudgetLine,
    CostRecord,
    CostSource,
    LedgerResult,
    RollupScope,
    ScheduledShift,
    UnpaidSummary,
    WeeklyReport,
    WorkerConflict,
)
from jobcost.domain.exceptions import InvalidScopeError, ProjectNotFoundError
from .cost_classifier import CostClassifier
from .cost_aggregator import aggregate
from .ledger_builder import build_ledger
from .unpaid_tracker import GROUPINGS, track_unpaid
from .weekly_report import build_weekly_report, week_range
from .schedule_conflicts import find_worker_conflicts

logger = logging.getLogger(__name__)


class ProjectRollupService:
    """
    Service for budget-vs-actual, unpaid labor, weekly hours and
    schedule conflicts.
    """

    def __init__(self, session: Session, config=None):
        self.session = session
        self.config = config or get_config()
        self.classifier = CostClassifier.from_config(self.config)
        self.budget_repo = BudgetRepository(session)
        self.cost_code_repo = CostCodeRepository(session)
        self.cost_repo = CostRepository(session)
        self.schedule_repo = ScheduleRepository(session)

    # =========================================================================
    # Record loading
    # =========================================================================

    def load_cost_records(self, scope: RollupScope) -> List[CostRecord]:
        """All actual-cost records in scope, every source."""
        defaults = self.config.source_defaults
        records = [
            CostRecord.from_row(row, CostSource.LABOR, defaults)
            for row in self.cost_repo.labor_rows(scope)
        ]
        records.extend(
            CostRecord.from_row(row, CostSource.MISC, defaults)
            for row in self.cost_repo.cost_rows(scope)
        )
        records.extend(
            CostRecord.from_row(row, CostSource.SUB, defaults)
            for row in self.cost_repo.sub_invoice_rows(scope, self.config.excluded_invoice_statuses)
        )
        records.extend(
            CostRecord.from_row(row, CostSource.MATERIAL, defaults)
            for row in self.cost_repo.material_receipt_rows(scope)
        )
        return records

    def load_labor_records(self, scope: RollupScope) -> List[CostRecord]:
        defaults = self.config.source_defaults
        return [
            CostRecord.from_row(row, CostSource.LABOR, defaults)
            for row in self.cost_repo.labor_rows(scope)
        ]

    # =========================================================================
    # Budget vs actual
    # =========================================================================

    def project_ledger(self, scope: RollupScope) -> LedgerResult:
        """
        Budget-vs-actual ledger for one project.

        Args:
            scope: Must carry project_id; date bounds restrict actuals only

        Returns:
            LedgerResult; a project without a budget gets zero budgets

        Raises:
            InvalidScopeError: If scope has no project_id
            ProjectNotFoundError: If the project does not exist
        """
        if not scope.project_id:
            raise InvalidScopeError("project_id is required for a project ledger")
        if self.budget_repo.get_project(scope.project_id) is None:
            raise ProjectNotFoundError(scope.project_id)

        cost_codes = self.cost_code_repo.index()
        budget_lines = [BudgetLine.from_row(r) for r in self.budget_repo.line_rows(scope.project_id)]
        if not budget_lines:
            logger.info(f"Project {scope.project_id} has no budget lines; reporting actuals only")

        records = self.load_cost_records(scope)
        actuals = aggregate(
            records,
            cost_codes,
            classifier=self.classifier,
            rate_source=self.config.labor_rate_source,
            paid_statuses=self.config.paid_statuses,
        )
        result = build_ledger(
            budget_lines,
            actuals,
            cost_codes,
            classifier=self.classifier,
            unassigned_label=self.config.get_unassigned_label,
        )

        logger.info(
            f"Ledger for project {scope.project_id}: {len(records)} cost records, "
            f"{len(budget_lines)} budget lines, {len(result.ledger)} ledger lines, "
            f"actual={result.summary.total_actual}"
        )
        return result

    # =========================================================================
    # Unpaid labor
    # =========================================================================

    def unpaid_labor(self, scope: RollupScope,
                     group_by: Sequence[str] = GROUPINGS) -> UnpaidSummary:
        """Unpaid labor totals and groupings for any scope."""
        records = self.load_labor_records(scope)
        summary = track_unpaid(
            records,
            group_by=group_by,
            rate_source=self.config.labor_rate_source,
            paid_statuses=self.config.paid_statuses,
        )
        logger.info(
            f"Unpaid labor {scope.to_dict()}: {summary.unpaid_count} logs, "
            f"{summary.total_unpaid_hours}h, ${summary.total_unpaid_amount}"
        )
        return summary

    # =========================================================================
    # Reporting / scheduling
    # =========================================================================

    def weekly_report(self, week_of: date, company_id: Optional[str] = None) -> WeeklyReport:
        """Company/worker/project hours for the week containing week_of."""
        start, end = week_range(week_of, self.config.week_start)
        rows = self.cost_repo.weekly_hours_rows(start, end, company_id)
        return build_weekly_report(rows, start, end)

    def schedule_conflicts(self, start: date, end: date,
                           project_id: Optional[str] = None) -> List[WorkerConflict]:
        """
        Worker double-bookings in [start, end].

        With project_id, only conflicts involving that project are returned.
        """
        if start > end:
            raise InvalidScopeError(f"start_date {start} is after end_date {end}")

        shifts = [
            shift for shift in (
                ScheduledShift.from_row(row)
                for row in self.schedule_repo.shift_rows(start, end, project_id)
            )
            if shift is not None
        ]
        conflicts = find_worker_conflicts(shifts)
        if project_id:
            conflicts = [c for c in conflicts if project_id in c.project_ids]
        return conflicts
