"""
Job Costing - budget-vs-actual rollups, unpaid labor tracking and weekly reports.
"""

__version__ = "1.0.0"
