"""
Domain Layer - Core job-costing entities and services.

This module contains:
- entities/: Immutable input records and result shapes (CostRecord, BudgetLine, LedgerLine, ...)
- services/: Rollup engine (classifier, aggregator, ledger builder, unpaid tracker) and reports
"""

from .entities import (
    CostRecord, CostCategory, CostSource,
    CostCode, BudgetLine, LedgerLine, BudgetSummary, LedgerResult,
    UnpaidSummary, RollupScope,
)

__all__ = [
    'CostRecord', 'CostCategory', 'CostSource',
    'CostCode', 'BudgetLine', 'LedgerLine', 'BudgetSummary', 'LedgerResult',
    'UnpaidSummary', 'RollupScope',
]
