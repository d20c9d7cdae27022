"""
Tests for the weekly company report.
"""
import pytest
from datetime import date
from decimal import Decimal

from jobcost.domain.services import build_weekly_report, render_weekly_report, week_range


ROWS = [
    {'date': date(2024, 3, 11), 'hours_worked': 8, 'worker_name': 'Ana',
     'project_name': 'Kitchen Remodel', 'company_name': 'Acme Remodeling'},
    {'date': date(2024, 3, 12), 'hours_worked': 4, 'worker_name': 'Ana',
     'project_name': 'Kitchen Remodel', 'company_name': 'Acme Remodeling'},
    {'date': date(2024, 3, 12), 'hours_worked': 2.5, 'worker_name': 'Ana',
     'project_name': 'Deck', 'company_name': 'Acme Remodeling'},
    {'date': '2024-03-13', 'hours_worked': 5, 'worker_name': None,
     'project_name': None, 'company_name': None},
    {'date': date(2024, 3, 20), 'hours_worked': 9, 'worker_name': 'Ana',
     'project_name': 'Kitchen Remodel', 'company_name': 'Acme Remodeling'},
]


class TestWeekRange:

    def test_sunday_start(self):
        assert week_range(date(2024, 6, 12)) == (date(2024, 6, 9), date(2024, 6, 15))

    def test_day_is_week_start(self):
        assert week_range(date(2024, 6, 9)) == (date(2024, 6, 9), date(2024, 6, 15))

    def test_monday_start(self):
        assert week_range(date(2024, 6, 9), "monday") == (date(2024, 6, 3), date(2024, 6, 9))

    def test_unknown_start(self):
        with pytest.raises(ValueError):
            week_range(date(2024, 6, 9), "someday")


class TestBuildWeeklyReport:
    """Tests for company -> worker -> project grouping."""

    def test_grouping(self):
        report = build_weekly_report(ROWS, date(2024, 3, 10), date(2024, 3, 16))

        assert [c.company for c in report.companies] == ['Acme Remodeling', 'No Company']
        acme = report.companies[0]
        assert acme.company_total == Decimal("14.5")
        ana = acme.workers[0]
        assert ana.name == 'Ana'
        assert [(j.project, j.hours) for j in ana.jobs] == [
            ('Kitchen Remodel', Decimal("12")), ('Deck', Decimal("2.5")),
        ]
        assert ana.total == Decimal("14.5")

    def test_missing_names_labelled(self):
        report = build_weekly_report(ROWS, date(2024, 3, 10), date(2024, 3, 16))
        unknown = report.companies[1].workers[0]
        assert unknown.name == 'Unknown'
        assert unknown.jobs[0].project == 'Unknown Project'

    def test_rows_outside_week_skipped(self):
        report = build_weekly_report(ROWS, date(2024, 3, 10), date(2024, 3, 16))
        assert report.grand_total == Decimal("19.5")

    def test_empty_week(self):
        report = build_weekly_report([], date(2024, 3, 10), date(2024, 3, 16))
        assert report.is_empty
        assert report.to_dict()['grand_total'] == 0


class TestRenderWeeklyReport:
    """Tests for the plain-text export."""

    def test_layout(self):
        report = build_weekly_report(ROWS, date(2024, 3, 10), date(2024, 3, 16))
        text = render_weekly_report(report)
        lines = text.splitlines()

        assert lines[0] == "Weekly Company Report"
        assert lines[1] == "Week: Mar 10 - Mar 16, 2024"
        assert lines[2] == "=" * 80
        assert "Ana                    | Kitchen Remodel            | 12.00" in lines
        assert "                       | Deck                       | 2.50" in lines
        assert "                       | TOTAL                      | 14.50" in lines
        assert "Company Total: 14.50 hours" in lines
        assert lines[-1] == "GRAND TOTAL: 19.50 hours"

    def test_custom_width(self):
        report = build_weekly_report([], date(2024, 3, 10), date(2024, 3, 16))
        text = render_weekly_report(report, width=40)
        assert "=" * 40 in text.splitlines()
        assert "GRAND TOTAL: 0.00 hours" in text
