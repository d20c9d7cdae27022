"""
Budget Ledger Builder - joins budget lines with aggregated actuals.

Invariants:
- Every budget line yields exactly one ledger line
- Every actuals bucket is consumed exactly once: by the first budget line
  on its key, otherwise by a synthesized zero-budget line
- Σ ledger.actual_amount = Σ actuals.by_category.amount
"""
import logging
from typing import Callable, Iterable, Mapping, Optional, Tuple

from jobcost.config import get_config
from jobcost.domain.entities import (
    BudgetLine,
    BudgetSummary,
    CostCategory,
    CostCode,
    LedgerLine,
    LedgerResult,
)
from jobcost.domain.entities.cost_record import ZERO
from jobcost.domain.exceptions import InvariantViolationError
from .cost_classifier import CostClassifier
from .cost_aggregator import (
    AggregatedActuals,
    ActualsBucket,
    category_from_key,
    is_unassigned_key,
    unassigned_key,
)

logger = logging.getLogger(__name__)

LabelLookup = Callable[[str], Tuple[str, str]]


def _sort_key(line: LedgerLine):
    return (line.category.value, line.code, line.cost_code_id or "")


def build_ledger(
    budget_lines: Iterable[BudgetLine],
    actuals: AggregatedActuals,
    cost_codes: Mapping[str, CostCode],
    classifier: Optional[CostClassifier] = None,
    unassigned_label: Optional[LabelLookup] = None,
) -> LedgerResult:
    """
    Build the budget-vs-actual ledger and its summary.

    A project without a budget is a valid input: every line is
    synthesized from actuals with a zero budget.

    Args:
        budget_lines: Lines of the project's active budget (may be empty)
        actuals: Output of aggregate() over the same scope
        cost_codes: Known cost codes keyed by id
        classifier: Category normalizer (defaults to configured one)
        unassigned_label: category -> (code, description) for unassigned rows

    Returns:
        LedgerResult sorted by category, then code
    """
    if classifier is None or unassigned_label is None:
        config = get_config()
        classifier = classifier or CostClassifier.from_config(config)
        unassigned_label = unassigned_label or config.get_unassigned_label

    pool = dict(actuals.by_code)
    ledger = []

    for budget_line in budget_lines:
        classification = classifier.classify(budget_line, cost_codes)
        key = classification.cost_code_id or unassigned_key(classification.category)
        bucket = pool.pop(key, None) or ActualsBucket()

        cost_code = cost_codes.get(classification.cost_code_id) if classification.cost_code_id else None
        if cost_code is not None:
            code, default_description = cost_code.code, cost_code.name
        else:
            code, default_description = unassigned_label(classification.category.value)

        ledger.append(LedgerLine(
            cost_code_id=classification.cost_code_id,
            code=code,
            description=budget_line.description or default_description,
            category=classification.category,
            budget_amount=budget_line.budget_amount,
            budget_hours=budget_line.budget_hours,
            actual_amount=bucket.amount,
            actual_hours=bucket.hours,
        ))

    for key in sorted(pool):
        bucket = pool[key]
        if is_unassigned_key(key):
            category = category_from_key(key)
            code, description = unassigned_label(category.value)
            cost_code_id = None
        else:
            cost_code = cost_codes.get(key)
            if cost_code is not None:
                category = classifier.normalize_category(cost_code.category)
                code, description = cost_code.code, cost_code.name
            else:
                category = CostCategory.OTHER
                code, description = key, ""
            cost_code_id = key

        ledger.append(LedgerLine(
            cost_code_id=cost_code_id,
            code=code,
            description=description,
            category=category,
            actual_amount=bucket.amount,
            actual_hours=bucket.hours,
        ))

    ledger.sort(key=_sort_key)

    summary = BudgetSummary(labor_unpaid=actuals.labor_unpaid)
    for line in ledger:
        totals = summary.category(line.category)
        totals.budget += line.budget_amount
        totals.actual += line.actual_amount

    expected = actuals.total_amount
    if summary.total_actual != expected:
        raise InvariantViolationError(
            "ledger_conservation", str(expected), str(summary.total_actual)
        )

    logger.debug(
        f"Ledger built: {len(ledger)} lines, budget={summary.total_budget}, "
        f"actual={summary.total_actual}"
    )
    return LedgerResult(ledger=ledger, summary=summary)
