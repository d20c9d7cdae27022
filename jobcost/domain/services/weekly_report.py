"""
Weekly Company Report - hours per company, worker and project for one week.

Rows are grouped in order of first appearance, so callers should pass
time logs ordered by date.
"""
from datetime import date, timedelta
from typing import Iterable, Optional, Tuple

from jobcost.config import get_config
from jobcost.domain.entities import WeeklyReport, CompanyWeek
from jobcost.domain.entities.cost_record import parse_date, to_decimal

_WEEKDAYS = {
    "monday": 0, "tuesday": 1, "wednesday": 2, "thursday": 3,
    "friday": 4, "saturday": 5, "sunday": 6,
}


def week_range(day: date, week_start: Optional[str] = None) -> Tuple[date, date]:
    """
    Get the reporting week containing a day.

    Example: 2024-06-12 (Wednesday), week_start='sunday'
    Returns: (2024-06-09, 2024-06-15)

    Args:
        day: Any date inside the week
        week_start: Weekday name the week starts on (default from config)
    """
    week_start = (week_start or get_config().week_start).lower()
    if week_start not in _WEEKDAYS:
        raise ValueError(f"Unknown week start day: {week_start}")
    offset = (day.weekday() - _WEEKDAYS[week_start]) % 7
    start = day - timedelta(days=offset)
    return start, start + timedelta(days=6)


def build_weekly_report(rows: Iterable[dict], week_start: date, week_end: date) -> WeeklyReport:
    """
    Group time log rows into a company/worker/project hours report.

    Args:
        rows: Dicts with date, hours_worked, worker_name, project_name, company_name
        week_start: First day of the week (inclusive)
        week_end: Last day of the week (inclusive)

    Returns:
        WeeklyReport; empty when no rows fall in the week
    """
    labels = get_config().weekly_report
    no_company = labels.get("no_company_label", "No Company")
    unknown_worker = labels.get("unknown_worker_label", "Unknown")
    unknown_project = labels.get("unknown_project_label", "Unknown Project")

    report = WeeklyReport(week_start=week_start, week_end=week_end)
    companies = {}

    for row in rows:
        worked_on = parse_date(row.get('date'))
        if worked_on is None or not (week_start <= worked_on <= week_end):
            continue

        company_name = row.get('company_name') or no_company
        worker_name = row.get('worker_name') or unknown_worker
        project_name = row.get('project_name') or unknown_project
        hours = to_decimal(row.get('hours_worked'))

        company = companies.get(company_name)
        if company is None:
            company = companies[company_name] = CompanyWeek(company=company_name)
            report.companies.append(company)

        company.company_total += hours
        company.worker(worker_name).add(project_name, hours)

    return report


def render_weekly_report(report: WeeklyReport, width: Optional[int] = None) -> str:
    """Render the plain-text export of a weekly report."""
    width = width or get_config().report_line_width
    rule = "=" * width
    thin = "-" * width

    lines = [
        "Weekly Company Report",
        f"Week: {report.week_start:%b} {report.week_start.day} - "
        f"{report.week_end:%b} {report.week_end.day}, {report.week_end.year}",
        rule,
        "",
    ]

    for company in report.companies:
        lines.append(company.company)
        lines.append(thin)
        lines.append("Worker                  | Project                    | Hours")
        lines.append(thin)
        for worker in company.workers:
            for index, job in enumerate(worker.jobs):
                name = worker.name.ljust(22) if index == 0 else " " * 22
                lines.append(f"{name} | {job.project.ljust(26)} | {job.hours:.2f}")
            lines.append(f"{' ' * 22} | {'TOTAL'.ljust(26)} | {worker.total:.2f}")
            lines.append(thin)
        lines.append("")
        lines.append(f"Company Total: {company.company_total:.2f} hours")
        lines.append(rule)
        lines.append("")

    lines.append("")
    lines.append(f"GRAND TOTAL: {report.grand_total:.2f} hours")
    return "\n".join(lines) + "\n"
