"""
Domain Services - classification, aggregation, ledger and reporting logic.
"""

from .cost_classifier import CostClassifier, Classification, classify, normalize_category
from .cost_aggregator import aggregate, AggregatedActuals, ActualsBucket, unassigned_key
from .ledger_builder import build_ledger
from .unpaid_tracker import track_unpaid, GROUPINGS
from .weekly_report import week_range, build_weekly_report, render_weekly_report
from .schedule_conflicts import find_worker_conflicts, conflicts_for_worker
from .cost_code_generator import (
    generate_costcodes_for_trade,
    missing_costcodes,
    suggest_cost_code,
    trade_prefix,
)
from .rollup_service import ProjectRollupService
from .cost_code_service import CostCodeService

__all__ = [
    'CostClassifier',
    'Classification',
    'classify',
    'normalize_category',
    'aggregate',
    'AggregatedActuals',
    'ActualsBucket',
    'unassigned_key',
    'build_ledger',
    'track_unpaid',
    'GROUPINGS',
    'week_range',
    'build_weekly_report',
    'render_weekly_report',
    'find_worker_conflicts',
    'conflicts_for_worker',
    'generate_costcodes_for_trade',
    'missing_costcodes',
    'suggest_cost_code',
    'trade_prefix',
    'ProjectRollupService',
    'CostCodeService',
]
