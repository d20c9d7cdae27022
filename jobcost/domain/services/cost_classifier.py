"""
Cost Classifier - maps a raw cost row to (category, cost_code_id).

Rules:
- Source-specific category strings collapse to labor / subs / materials / other
- Unknown or null categories fall back to other
- A cost_code_id that does not resolve is treated as unassigned, never an error
"""
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from jobcost.config import get_config
from jobcost.domain.entities import CostCategory, CostCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    """Result of classifying one record."""
    category: CostCategory
    cost_code_id: Optional[str]

    @property
    def is_unassigned(self) -> bool:
        return self.cost_code_id is None


class CostClassifier:
    """
    Category normalizer and cost code resolver.

    Stateless apart from the alias table; safe to share between calls.
    """

    def __init__(self, aliases: Mapping[str, str], fallback: str = "other"):
        self._aliases = {k.strip().lower(): CostCategory(v) for k, v in aliases.items()}
        self._fallback = CostCategory(fallback)

    @classmethod
    def from_config(cls, config=None) -> 'CostClassifier':
        config = config or get_config()
        return cls(config.category_aliases, config.fallback_category)

    def normalize_category(self, raw: Optional[str]) -> CostCategory:
        """Collapse a stored category string to a canonical bucket."""
        if raw is None:
            return self._fallback
        if isinstance(raw, CostCategory):
            return raw
        return self._aliases.get(str(raw).strip().lower(), self._fallback)

    def classify(self, record, cost_codes: Mapping[str, CostCode]) -> Classification:
        """
        Classify a cost record or budget line.

        Args:
            record: Anything with `category` and `cost_code_id` attributes
            cost_codes: Known cost codes keyed by id

        Returns:
            Classification with canonical category and resolved cost code id
        """
        category = self.normalize_category(record.category)
        cost_code_id = record.cost_code_id
        if cost_code_id is not None and cost_code_id not in cost_codes:
            logger.debug(f"Cost code {cost_code_id} not found; treating as unassigned")
            cost_code_id = None
        return Classification(category=category, cost_code_id=cost_code_id)


def default_classifier() -> CostClassifier:
    """Classifier built from the active configuration."""
    return CostClassifier.from_config()


def normalize_category(raw: Optional[str]) -> CostCategory:
    return default_classifier().normalize_category(raw)


def classify(record, cost_codes: Mapping[str, CostCode]) -> Classification:
    """Classify with the configured alias table."""
    return default_classifier().classify(record, cost_codes)
