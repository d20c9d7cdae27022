"""
Integration Tests for repositories and ProjectRollupService on SQLite.

Uses the seeded kitchen remodel from conftest.
"""
import pytest
from datetime import date
from decimal import Decimal

from jobcost.models import MaterialReceipt, SubInvoice, Worker
from jobcost.domain.entities import CostCategory, RollupScope
from jobcost.domain.exceptions import InvalidScopeError, ProjectNotFoundError
from jobcost.domain.services import ProjectRollupService
from jobcost.infrastructure.repositories import (
    BudgetRepository,
    CostRepository,
    ScheduleRepository,
)


# =============================================================================
# Repositories
# =============================================================================

class TestBudgetRepository:

    def test_line_rows(self, seeded):
        rows = BudgetRepository(seeded).line_rows("proj-1")
        assert [r['id'] for r in rows] == ["bl-1", "bl-2", "bl-3"]
        assert rows[0]['budget_amount'] == Decimal("500")
        assert rows[2]['cost_code_id'] is None

    def test_no_budget_header(self, seeded):
        assert BudgetRepository(seeded).line_rows("proj-2") == []


class TestCostRepository:

    def test_labor_rows_join_current_rate(self, seeded):
        rows = CostRepository(seeded).labor_rows(RollupScope(project_id="proj-1"))
        assert [r['id'] for r in rows] == ["tl-1", "tl-2", "tl-3"]
        assert rows[0]['hourly_rate'] == Decimal("50")
        assert rows[0]['labor_cost'] == Decimal("320")
        assert rows[2]['labor_cost'] is None
        assert rows[0]['company_id'] == "co-1"

    def test_labor_rows_company_filter(self, seeded):
        rows = CostRepository(seeded).labor_rows(RollupScope(company_id="co-2"))
        assert [r['id'] for r in rows] == ["tl-4"]

    def test_labor_rows_date_filter(self, seeded):
        scope = RollupScope(start_date=date(2024, 3, 12), end_date=date(2024, 3, 12))
        rows = CostRepository(seeded).labor_rows(scope)
        assert [r['id'] for r in rows] == ["tl-2"]

    def test_linked_receipts_excluded(self, seeded):
        rows = CostRepository(seeded).material_receipt_rows(RollupScope(project_id="proj-1"))
        assert [r['id'] for r in rows] == ["rc-1"]
        assert rows[0]['category'] == "materials"

    def test_rejected_sub_invoices_excluded(self, seeded):
        seeded.add(SubInvoice(id="inv-rej", project_id="proj-1", cost_code_id="cc-plum-s",
                              invoice_date=date(2024, 3, 15), total_cents=500000,
                              payment_status="Rejected"))
        seeded.commit()

        repo = CostRepository(seeded)
        rows = repo.sub_invoice_rows(RollupScope(project_id="proj-1"))
        assert [r['id'] for r in rows] == ["inv-1"]

        rows = repo.sub_invoice_rows(RollupScope(project_id="proj-1"), excluded_statuses=[])
        assert [r['id'] for r in rows] == ["inv-1", "inv-rej"]

    def test_invoices_and_receipts_company_filter(self, seeded):
        seeded.add(SubInvoice(id="inv-2", project_id="proj-2", invoice_date=date(2024, 3, 14),
                              total_cents=40000))
        seeded.add(MaterialReceipt(id="rc-3", project_id="proj-2", receipt_date=date(2024, 3, 14),
                                   total_cents=12000))
        seeded.commit()

        repo = CostRepository(seeded)
        assert [r['id'] for r in repo.sub_invoice_rows(RollupScope(company_id="co-1"))] == ["inv-1"]
        assert [r['id'] for r in repo.sub_invoice_rows(RollupScope(company_id="co-2"))] == ["inv-2"]
        assert [r['id'] for r in repo.material_receipt_rows(RollupScope(company_id="co-1"))] == ["rc-1"]
        assert [r['id'] for r in repo.material_receipt_rows(RollupScope(company_id="co-2"))] == ["rc-3"]

    def test_weekly_hours_rows(self, seeded):
        rows = CostRepository(seeded).weekly_hours_rows(date(2024, 3, 10), date(2024, 3, 16), "co-2")
        assert rows == [{
            'date': date(2024, 3, 13),
            'hours_worked': 5,
            'worker_name': "Ben",
            'project_name': "Bath Remodel",
            'company_name': "Beta Builders",
        }]


class TestScheduleRepository:

    def test_project_filter_keeps_other_projects_of_booked_workers(self, seeded):
        rows = ScheduleRepository(seeded).shift_rows(date(2024, 3, 10), date(2024, 3, 16), "proj-2")
        assert sorted(r['id'] for r in rows) == ["sh-1", "sh-2"]

    def test_date_window(self, seeded):
        rows = ScheduleRepository(seeded).shift_rows(date(2024, 3, 14), date(2024, 3, 14))
        assert [r['worker_name'] for r in rows] == ["Ana"]


# =============================================================================
# ProjectRollupService
# =============================================================================

class TestProjectLedger:
    """Tests for the end-to-end project ledger."""

    def test_ledger_lines(self, seeded):
        result = ProjectRollupService(seeded).project_ledger(RollupScope(project_id="proj-1"))
        by_code = {line.code: line for line in result.ledger}

        assert [line.code for line in result.ledger] == [
            "ELEC-L", "LABOR", "ELEC-M", "MATERIALS", "MISC", "PLUM-S",
        ]
        assert by_code["ELEC-L"].actual_amount == Decimal("600")
        assert by_code["ELEC-L"].actual_hours == Decimal("12")
        assert by_code["ELEC-L"].percent_used == Decimal("120")
        assert by_code["LABOR"].actual_amount == Decimal("60")
        assert by_code["MATERIALS"].actual_amount == Decimal("300")
        assert by_code["MISC"].description == "Contingency"
        assert by_code["PLUM-S"].variance == Decimal("-200")

    def test_summary(self, seeded):
        summary = ProjectRollupService(seeded).project_ledger(RollupScope(project_id="proj-1")).summary

        assert summary.category(CostCategory.LABOR).actual == Decimal("660")
        assert summary.category(CostCategory.MATERIALS).actual == Decimal("550")
        assert summary.category(CostCategory.SUBS).variance == Decimal("200")
        assert summary.total_budget == Decimal("1900")
        assert summary.total_actual == Decimal("2210")
        assert summary.total_variance == Decimal("-310")
        assert summary.labor_unpaid == Decimal("260")

    def test_rejected_invoice_not_counted(self, seeded):
        seeded.add(SubInvoice(id="inv-rej", project_id="proj-1", cost_code_id="cc-plum-s",
                              invoice_date=date(2024, 3, 15), total_cents=500000,
                              payment_status="rejected"))
        seeded.commit()

        result = ProjectRollupService(seeded).project_ledger(RollupScope(project_id="proj-1"))
        assert result.summary.category(CostCategory.SUBS).actual == Decimal("1000")
        assert result.summary.total_actual == Decimal("2210")

    def test_rate_change_rewrites_history(self, seeded):
        """Labor cost follows the worker's current rate."""
        seeded.query(Worker).filter(Worker.id == "w-ana").update({"hourly_rate_cents": 6000})
        seeded.commit()

        result = ProjectRollupService(seeded).project_ledger(RollupScope(project_id="proj-1"))
        elec = next(line for line in result.ledger if line.code == "ELEC-L")
        assert elec.actual_amount == Decimal("720")

    def test_date_scope_filters_actuals_not_budget(self, seeded):
        scope = RollupScope(project_id="proj-1", start_date=date(2024, 3, 14), end_date=date(2024, 3, 31))
        result = ProjectRollupService(seeded).project_ledger(scope)

        assert result.summary.total_budget == Decimal("1900")
        assert result.summary.total_actual == Decimal("1000")
        assert len(result.ledger) == 3

    def test_project_without_budget(self, seeded):
        result = ProjectRollupService(seeded).project_ledger(RollupScope(project_id="proj-2"))
        assert result.summary.total_budget == 0
        assert [line.code for line in result.ledger] == ["LABOR"]
        assert result.ledger[0].actual_amount == Decimal("150")

    def test_unknown_project(self, seeded):
        with pytest.raises(ProjectNotFoundError):
            ProjectRollupService(seeded).project_ledger(RollupScope(project_id="nope"))

    def test_scope_requires_project(self, seeded):
        with pytest.raises(InvalidScopeError):
            ProjectRollupService(seeded).project_ledger(RollupScope())

    def test_inverted_dates(self):
        with pytest.raises(InvalidScopeError):
            RollupScope(start_date=date(2024, 3, 2), end_date=date(2024, 3, 1))


class TestUnpaidLabor:

    def test_all_companies(self, seeded):
        summary = ProjectRollupService(seeded).unpaid_labor(RollupScope())

        assert summary.total_unpaid_amount == Decimal("410")
        assert summary.total_unpaid_hours == Decimal("11")
        assert summary.total_paid_amount == Decimal("400")
        assert summary.unpaid_count == 3
        assert summary.by_worker["w-ana"].amount == Decimal("200")
        assert summary.by_worker["w-ben"].amount == Decimal("210")
        assert summary.by_company["co-2"].amount == Decimal("150")
        assert summary.workers_count == 2

    def test_company_scope(self, seeded):
        summary = ProjectRollupService(seeded).unpaid_labor(RollupScope(company_id="co-1"))
        assert summary.total_unpaid_amount == Decimal("260")

    def test_worker_scope(self, seeded):
        summary = ProjectRollupService(seeded).unpaid_labor(RollupScope(worker_id="w-ben"))
        assert summary.total_unpaid_amount == Decimal("210")
        assert list(summary.by_worker) == ["w-ben"]


class TestWeeklyReportService:

    def test_week_containing_date(self, seeded):
        report = ProjectRollupService(seeded).weekly_report(date(2024, 3, 13))

        assert report.week_start == date(2024, 3, 10)
        assert report.week_end == date(2024, 3, 16)
        assert [c.company for c in report.companies] == ["Acme Remodeling", "Beta Builders"]
        assert report.companies[0].company_total == Decimal("14")
        assert report.grand_total == Decimal("19")

    def test_company_filter(self, seeded):
        report = ProjectRollupService(seeded).weekly_report(date(2024, 3, 13), "co-2")
        assert [c.company for c in report.companies] == ["Beta Builders"]


class TestScheduleConflictsService:

    def test_conflicts_in_window(self, seeded):
        conflicts = ProjectRollupService(seeded).schedule_conflicts(date(2024, 3, 10), date(2024, 3, 16))
        assert len(conflicts) == 1
        assert conflicts[0].worker_id == "w-ben"
        assert conflicts[0].cross_project
        assert conflicts[0].project_names == ["Kitchen Remodel", "Bath Remodel"]

    def test_project_filter(self, seeded):
        service = ProjectRollupService(seeded)
        assert len(service.schedule_conflicts(date(2024, 3, 10), date(2024, 3, 16), "proj-2")) == 1
        assert service.schedule_conflicts(date(2024, 3, 10), date(2024, 3, 16), "proj-x") == []

    def test_inverted_window(self, seeded):
        with pytest.raises(InvalidScopeError):
            ProjectRollupService(seeded).schedule_conflicts(date(2024, 3, 16), date(2024, 3, 10))
