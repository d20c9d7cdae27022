"""
Repository implementations for data access layer.
"""
from .base_repository import BaseRepository
from .budget_repository import BudgetRepository
from .cost_code_repository import CostCodeRepository
from .cost_repository import CostRepository
from .schedule_repository import ScheduleRepository

__all__ = [
    'BaseRepository',
    'BudgetRepository',
    'CostCodeRepository',
    'CostRepository',
    'ScheduleRepository',
]
