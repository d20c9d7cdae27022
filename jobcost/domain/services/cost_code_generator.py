"""
Cost Code Generator - derives cost codes from trade naming conventions.

Conventions:
- {KEY}-L  labor, {KEY}-M  materials, {KEY}-S  subs
- equipment shares the materials suffix, other has none
- trade-less MISC-L / MISC-O catch-alls
"""
import re
from typing import Iterable, List, Optional

from jobcost.config import get_config
from jobcost.domain.entities import CostCode, CostCodeDraft

_TRADE_CATEGORIES = (
    ("labor", "-L", "Labor"),
    ("materials", "-M", "Materials"),
    ("subs", "-S", "Subcontract"),
)


def trade_prefix(trade_name: str, length: Optional[int] = None) -> str:
    """First characters of a trade name, whitespace removed, uppercased."""
    length = length or get_config().cost_code_prefix_length
    return re.sub(r"\s+", "", trade_name).upper()[:length]


def suggest_cost_code(trade_name: Optional[str], category: str) -> str:
    """
    Suggest a code for a new cost code.

    Example: ('Electrical', 'labor') -> 'ELE-L'; (None, 'subs') -> 'CUSTOM-S'
    """
    config = get_config()
    suffix = config.cost_code_suffixes.get(category, "")
    if trade_name and trade_name.strip():
        return f"{trade_prefix(trade_name)}{suffix}"
    return f"{config.custom_cost_code_prefix}{suffix}"


def generate_costcodes_for_trade(
    trade_key: str,
    trade_name: str,
    trade_id: Optional[str] = None,
) -> List[CostCodeDraft]:
    """The three standard codes for a trade."""
    return [
        CostCodeDraft(
            code=f"{trade_key}{suffix}",
            name=f"{label} – {trade_name}",
            category=category,
            trade_id=trade_id,
        )
        for category, suffix, label in _TRADE_CATEGORIES
    ]


def missing_costcodes(trades: Iterable[dict], existing: Iterable[CostCode]) -> List[CostCodeDraft]:
    """
    Drafts for every trade category (and misc catch-all) that has no code yet.

    Args:
        trades: Dicts with id, name and optionally key
        existing: Cost codes already in the store

    Returns:
        Drafts whose code is not already taken, in trade order
    """
    existing = list(existing)
    taken = {c.code.upper() for c in existing}
    drafts = []

    def _propose(draft: CostCodeDraft) -> None:
        if draft.code.upper() in taken:
            return
        taken.add(draft.code.upper())
        drafts.append(draft)

    for trade in trades:
        trade_id = trade.get('id')
        name = trade.get('name') or ''
        key = trade.get('key') or trade_prefix(name)
        have = {c.category for c in existing if trade_id is not None and c.trade_id == trade_id}
        for draft in generate_costcodes_for_trade(key, name, trade_id):
            if draft.category not in have:
                _propose(draft)

    tradeless = {c.category for c in existing if c.trade_id is None}
    for misc in get_config().misc_cost_codes:
        if misc['category'] not in tradeless:
            _propose(CostCodeDraft(code=misc['code'], name=misc['name'], category=misc['category']))

    return drafts
