"""
CLI Module - Command-line interface for the Job Cost Ledger.

Provides commands for:
- Project ledgers and unpaid labor (with CSV export)
- Weekly company report
- Schedule conflicts
- Cost code generation and database setup
"""

from .commands import cli

__all__ = ['cli']
