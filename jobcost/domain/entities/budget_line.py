"""
Budget Line Entity and derived ledger shapes.

Sign conventions differ by level and are kept as the dashboards expect:
- LedgerLine.variance = actual - budget (positive = over budget)
- CategoryTotals.variance / BudgetSummary.total_variance = budget - actual
  (positive = under budget)
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from .cost_record import CostCategory, to_decimal, optional_decimal, ZERO


def _money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


@dataclass(frozen=True)
class BudgetLine:
    """
    One line of a project's active budget.

    Attributes:
        id: Store identifier
        project_id: Owning project
        cost_code_id: Join key to actuals; None budgets the category's unassigned bucket
        category: Raw category string (normalized by the classifier)
        description: Free text
        budget_amount: Budgeted dollars
        budget_hours: Budgeted hours (labor lines)
    """

    id: str
    project_id: Optional[str] = None
    cost_code_id: Optional[str] = None
    category: Optional[str] = None
    description: str = ""
    budget_amount: Decimal = ZERO
    budget_hours: Optional[Decimal] = None

    @classmethod
    def from_row(cls, row: dict) -> 'BudgetLine':
        return cls(
            id=str(row['id']),
            project_id=row.get('project_id'),
            cost_code_id=row.get('cost_code_id') or None,
            category=row.get('category'),
            description=row.get('description') or '',
            budget_amount=to_decimal(row.get('budget_amount')),
            budget_hours=optional_decimal(row.get('budget_hours')),
        )


@dataclass
class LedgerLine:
    """One row of the budget-vs-actual report."""

    cost_code_id: Optional[str]
    code: str
    description: str
    category: CostCategory
    budget_amount: Decimal = ZERO
    budget_hours: Optional[Decimal] = None
    actual_amount: Decimal = ZERO
    actual_hours: Decimal = ZERO

    @property
    def variance(self) -> Decimal:
        """actual - budget; positive means over budget."""
        return self.actual_amount - self.budget_amount

    @property
    def percent_used(self) -> Optional[Decimal]:
        """Actual as a percentage of budget, None when there is no budget."""
        if self.budget_amount > 0:
            return self.actual_amount / self.budget_amount * 100
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'cost_code_id': self.cost_code_id,
            'code': self.code,
            'description': self.description,
            'category': self.category.value,
            'budget_amount': float(self.budget_amount),
            'budget_hours': _money(self.budget_hours),
            'actual_amount': float(self.actual_amount),
            'actual_hours': float(self.actual_hours),
            'variance': float(self.variance),
            'percent_used': _money(self.percent_used),
        }


@dataclass
class CategoryTotals:
    """Budget and actual for one canonical category."""

    budget: Decimal = ZERO
    actual: Decimal = ZERO

    @property
    def variance(self) -> Decimal:
        """budget - actual; positive means under budget."""
        return self.budget - self.actual


@dataclass
class BudgetSummary:
    """Project-level rollup of the ledger."""

    by_category: Dict[CostCategory, CategoryTotals] = field(
        default_factory=lambda: {c: CategoryTotals() for c in CostCategory}
    )
    labor_unpaid: Decimal = ZERO

    @property
    def total_budget(self) -> Decimal:
        return sum((t.budget for t in self.by_category.values()), ZERO)

    @property
    def total_actual(self) -> Decimal:
        return sum((t.actual for t in self.by_category.values()), ZERO)

    @property
    def total_variance(self) -> Decimal:
        """total_budget - total_actual; positive means under budget."""
        return self.total_budget - self.total_actual

    def category(self, category: CostCategory) -> CategoryTotals:
        return self.by_category[category]

    def to_dict(self) -> dict:
        """Flattened form: <category>_budget / _actual / _variance plus totals."""
        data = {}
        for category, totals in self.by_category.items():
            data[f"{category.value}_budget"] = float(totals.budget)
            data[f"{category.value}_actual"] = float(totals.actual)
            data[f"{category.value}_variance"] = float(totals.variance)
        data.update({
            'total_budget': float(self.total_budget),
            'total_actual': float(self.total_actual),
            'total_variance': float(self.total_variance),
            'labor_unpaid': float(self.labor_unpaid),
        })
        return data


@dataclass
class LedgerResult:
    """Ledger lines plus their summary."""

    ledger: List[LedgerLine]
    summary: BudgetSummary

    def to_dict(self) -> dict:
        return {
            'ledger': [line.to_dict() for line in self.ledger],
            'summary': self.summary.to_dict(),
        }
