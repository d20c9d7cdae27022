# Job Costing - Modules
from .export import (
    format_money,
    ledger_to_frame,
    unpaid_to_frame,
    conflicts_to_frame,
)

__all__ = [
    "format_money",
    "ledger_to_frame",
    "unpaid_to_frame",
    "conflicts_to_frame",
]
