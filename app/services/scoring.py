# scoring.py
from __future__ import annotations
from typing import Dict, List, Tuple

from app.rules.ruleset import DEFAULT_RULES, Rule
from app.schemas import Receipt
from app.utils.logging import logger


def compute_points(receipt: Receipt, rules: List[Rule] | None = None) -> Tuple[int, Dict[str, int]]:
    """
    Returns (points, breakdown)
    - breakdown maps each rule's reason to the points it contributed, in rule order
    - every rule runs; none short-circuits another
    """
    breakdown: Dict[str, int] = {}
    total = 0
    for rule in (DEFAULT_RULES if rules is None else rules):
        points, reason = rule(receipt)
        breakdown[reason] = points
        total += points
    return total, breakdown


def score(receipt: Receipt) -> int:
    points, breakdown = compute_points(receipt)
    logger.debug("Scored receipt from %r: %s -> %s", receipt.retailer, breakdown, points)
    return points
