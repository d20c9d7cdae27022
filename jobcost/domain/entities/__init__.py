"""
Domain Entities - Core business objects.
"""

from .cost_record import CostRecord, CostCategory, CostSource, to_decimal
from .cost_code import CostCode, CostCodeDraft
from .budget_line import BudgetLine, LedgerLine, CategoryTotals, BudgetSummary, LedgerResult
from .unpaid import UnpaidBucket, UnpaidSummary
from .schedule import ScheduledShift, WorkerConflict
from .weekly_report import WeeklyReport, CompanyWeek, WorkerWeek, JobHours
from .scope import RollupScope

__all__ = [
    'CostRecord', 'CostCategory', 'CostSource', 'to_decimal',
    'CostCode', 'CostCodeDraft',
    'BudgetLine', 'LedgerLine', 'CategoryTotals', 'BudgetSummary', 'LedgerResult',
    'UnpaidBucket', 'UnpaidSummary',
    'ScheduledShift', 'WorkerConflict',
    'WeeklyReport', 'CompanyWeek', 'WorkerWeek', 'JobHours',
    'RollupScope',
]
