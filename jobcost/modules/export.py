"""
Export helpers - tabular (pandas) views of rollup results for CSV output.
"""
from decimal import Decimal
from typing import Optional

import pandas as pd

from jobcost.config import get_config
from jobcost.domain.entities import LedgerResult, UnpaidSummary, WorkerConflict

LEDGER_COLUMNS = [
    'code', 'description', 'category',
    'budget_amount', 'budget_hours', 'actual_amount', 'actual_hours',
    'variance', 'percent_used', 'cost_code_id',
]

UNPAID_COLUMNS = ['grouping', 'key', 'hours', 'amount', 'count']

CONFLICT_COLUMNS = [
    'date', 'worker_id', 'worker_name', 'shift_count', 'total_hours',
    'cross_project', 'project_names',
]


def format_money(amount: Optional[Decimal]) -> str:
    """Format a dollar amount using the configured currency settings."""
    if amount is None:
        return ""
    currency = get_config().currency_config
    places = int(currency.get("decimal_places", 2))
    text = f"{abs(float(amount)):,.{places}f}"
    separator = currency.get("thousands_separator", ",")
    if separator != ",":
        text = text.replace(",", separator)
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency.get('symbol', '$')}{text}"


def ledger_to_frame(result: LedgerResult) -> pd.DataFrame:
    """Ledger lines as a DataFrame, one row per line, in ledger order."""
    if not result.ledger:
        return pd.DataFrame(columns=LEDGER_COLUMNS)
    df = pd.DataFrame([line.to_dict() for line in result.ledger])
    return df[LEDGER_COLUMNS]


def unpaid_to_frame(summary: UnpaidSummary) -> pd.DataFrame:
    """Long-form unpaid groupings: one row per (grouping, key)."""
    data = summary.to_dict()
    rows = []
    for grouping in ('by_worker', 'by_project', 'by_company'):
        for key, bucket in data[grouping].items():
            rows.append({'grouping': grouping[3:], 'key': key, **bucket})
    return pd.DataFrame(rows, columns=UNPAID_COLUMNS)


def conflicts_to_frame(conflicts: list[WorkerConflict]) -> pd.DataFrame:
    rows = []
    for conflict in conflicts:
        row = conflict.to_dict()
        row['project_names'] = "; ".join(n for n in conflict.project_names if n)
        rows.append(row)
    return pd.DataFrame(rows, columns=CONFLICT_COLUMNS)
