"""
Infrastructure Layer - repository implementations over the SQLAlchemy store.
"""

from .repositories import (
    BaseRepository,
    BudgetRepository,
    CostCodeRepository,
    CostRepository,
    ScheduleRepository,
)

__all__ = [
    'BaseRepository',
    'BudgetRepository',
    'CostCodeRepository',
    'CostRepository',
    'ScheduleRepository',
]
