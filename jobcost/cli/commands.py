"""
Job Cost CLI Commands - ledger, unpaid labor, reports and maintenance.

Usage:
    jobcost ledger PROJECT_ID --csv ledger.csv
    jobcost unpaid --company COMPANY_ID --start 2024-01-01
    jobcost weekly-report 2024-03-13 --output week.txt
    jobcost conflicts 2024-03-10 2024-03-16
    jobcost generate-codes --dry-run
    jobcost serve --port 8000
"""
import click
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from jobcost import __version__
from jobcost.models import get_db, init_db
from jobcost.domain.entities import RollupScope
from jobcost.domain.exceptions import DomainError
from jobcost.domain.services import (
    CostCodeService,
    ProjectRollupService,
    GROUPINGS,
    render_weekly_report,
)
from jobcost.modules.export import (
    conflicts_to_frame,
    format_money,
    ledger_to_frame,
    unpaid_to_frame,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DATE = click.DateTime(formats=["%Y-%m-%d"])


def open_session() -> Session:
    """New database session for one command."""
    return next(get_db())


def _day(value: Optional[datetime]):
    return value.date() if value else None


def _fail(error: DomainError):
    click.echo(click.style(f"✗ {error.message}", fg='red'), err=True)
    raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
def cli(verbose: bool):
    """Job Cost Ledger CLI.

    Budget-vs-actual rollups, unpaid labor and weekly hours reports
    for remodeling projects.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.argument('project_id')
@click.option('--start', type=DATE, default=None, help='Actuals from this date (YYYY-MM-DD)')
@click.option('--end', type=DATE, default=None, help='Actuals up to this date (YYYY-MM-DD)')
@click.option('--csv', 'csv_path', type=click.Path(dir_okay=False), default=None,
              help='Write ledger lines to a CSV file')
def ledger(project_id: str, start, end, csv_path: Optional[str]):
    """Show the budget-vs-actual ledger for a project."""
    db = open_session()
    try:
        scope = RollupScope(project_id=project_id, start_date=_day(start), end_date=_day(end))
        result = ProjectRollupService(db).project_ledger(scope)
    except DomainError as e:
        _fail(e)
    finally:
        db.close()

    if csv_path:
        ledger_to_frame(result).to_csv(csv_path, index=False)
        click.echo(click.style(f"✓ Wrote {len(result.ledger)} ledger lines to {csv_path}", fg='green'))
        return

    click.echo(click.style(f"Ledger - project {project_id}", fg='cyan', bold=True))
    click.echo(f"{'Code':<14}{'Description':<32}{'Budget':>14}{'Actual':>14}{'Variance':>14}{'Used':>8}")
    click.echo("-" * 96)
    for line in result.ledger:
        used = f"{line.percent_used:.0f}%" if line.percent_used is not None else "-"
        click.echo(
            f"{line.code[:13]:<14}{line.description[:31]:<32}"
            f"{format_money(line.budget_amount):>14}{format_money(line.actual_amount):>14}"
            f"{format_money(line.variance):>14}{used:>8}"
        )

    summary = result.summary
    click.echo("-" * 96)
    for category, totals in summary.by_category.items():
        click.echo(
            f"  {category.value:<12} budget {format_money(totals.budget):>14}  "
            f"actual {format_money(totals.actual):>14}  "
            f"variance {format_money(totals.variance):>14}"
        )
    click.echo(
        f"  {'TOTAL':<12} budget {format_money(summary.total_budget):>14}  "
        f"actual {format_money(summary.total_actual):>14}  "
        f"variance {format_money(summary.total_variance):>14}"
    )
    click.echo(f"  Unpaid labor: {format_money(summary.labor_unpaid)}")


@cli.command()
@click.option('--project', 'project_id', default=None, help='Project ID')
@click.option('--company', 'company_id', default=None, help='Company ID')
@click.option('--worker', 'worker_id', default=None, help='Worker ID')
@click.option('--start', type=DATE, default=None, help='From date (YYYY-MM-DD)')
@click.option('--end', type=DATE, default=None, help='To date (YYYY-MM-DD)')
@click.option('--group-by', 'group_by', multiple=True, type=click.Choice(GROUPINGS),
              help='Grouping to compute (repeatable; default all)')
@click.option('--csv', 'csv_path', type=click.Path(dir_okay=False), default=None,
              help='Write groupings to a CSV file')
def unpaid(project_id, company_id, worker_id, start, end, group_by, csv_path):
    """Show unpaid labor for any scope."""
    db = open_session()
    try:
        scope = RollupScope(
            project_id=project_id,
            company_id=company_id,
            worker_id=worker_id,
            start_date=_day(start),
            end_date=_day(end),
        )
        summary = ProjectRollupService(db).unpaid_labor(scope, group_by=group_by or GROUPINGS)
    except DomainError as e:
        _fail(e)
    finally:
        db.close()

    if csv_path:
        unpaid_to_frame(summary).to_csv(csv_path, index=False)
        click.echo(click.style(f"✓ Wrote unpaid labor groupings to {csv_path}", fg='green'))
        return

    click.echo(click.style("Unpaid labor", fg='cyan', bold=True))
    click.echo(f"  Unpaid:  {format_money(summary.total_unpaid_amount):>14}  "
               f"{float(summary.total_unpaid_hours):>8.2f}h  ({summary.unpaid_count} logs)")
    click.echo(f"  Paid:    {format_money(summary.total_paid_amount):>14}  "
               f"{float(summary.total_paid_hours):>8.2f}h")
    click.echo(f"  Workers with unpaid time: {summary.workers_count}")

    frame = unpaid_to_frame(summary)
    if not frame.empty:
        click.echo("")
        click.echo(frame.to_string(index=False))


@cli.command('weekly-report')
@click.argument('week_of', type=DATE)
@click.option('--company', 'company_id', default=None, help='Company ID')
@click.option('--output', type=click.Path(dir_okay=False), default=None,
              help='Write the text report to a file')
def weekly_report(week_of, company_id: Optional[str], output: Optional[str]):
    """Print the weekly company report for the week containing WEEK_OF."""
    db = open_session()
    try:
        report = ProjectRollupService(db).weekly_report(week_of.date(), company_id)
    finally:
        db.close()

    text = render_weekly_report(report)
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(text)
        click.echo(click.style(f"✓ Wrote weekly report to {output}", fg='green'))
    else:
        click.echo(text)


@cli.command()
@click.argument('start', type=DATE)
@click.argument('end', type=DATE)
@click.option('--project', 'project_id', default=None, help='Only conflicts involving this project')
def conflicts(start, end, project_id: Optional[str]):
    """List workers booked more than once on the same day."""
    db = open_session()
    try:
        found = ProjectRollupService(db).schedule_conflicts(start.date(), end.date(), project_id)
    except DomainError as e:
        _fail(e)
    finally:
        db.close()

    if not found:
        click.echo(click.style("✓ No schedule conflicts", fg='green'))
        return

    click.echo(click.style(f"{len(found)} schedule conflict(s)", fg='yellow', bold=True))
    click.echo(conflicts_to_frame(found).to_string(index=False))


@cli.command('generate-codes')
@click.option('--dry-run', is_flag=True, help='Show what would be created')
def generate_codes(dry_run: bool):
    """Create missing {KEY}-L/-M/-S and MISC cost codes."""
    db = open_session()
    try:
        drafts = CostCodeService(db).generate_missing(dry_run=dry_run)
    except DomainError as e:
        _fail(e)
    finally:
        db.close()

    verb = "Would create" if dry_run else "Created"
    click.echo(f"{verb} {len(drafts)} cost code(s)")
    for draft in drafts:
        click.echo(f"  {draft.code:<12} {draft.name}")


@cli.command('init-db')
def init_db_command():
    """Create all database tables."""
    init_db()
    click.echo(click.style("✓ Database initialized", fg='green'))


@cli.command()
@click.option('--port', type=int, default=8000, help='Server port')
@click.option('--host', default='0.0.0.0', help='Server host')
@click.option('--reload', is_flag=True, help='Enable auto-reload')
def serve(port: int, host: str, reload: bool):
    """Start the API server.

    Example:
        jobcost serve --port 8000 --reload
    """
    import uvicorn

    click.echo(click.style('Job Cost Ledger - API Server', fg='cyan', bold=True))
    click.echo(f"Starting server at http://{host}:{port}")
    click.echo("Press CTRL+C to stop\n")

    uvicorn.run(
        "jobcost.main:app",
        host=host,
        port=port,
        reload=reload
    )
