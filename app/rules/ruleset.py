# app/rules/ruleset.py
import math
import re
from decimal import Decimal
from typing import Callable, List, Tuple

from app.schemas import Receipt

# -----------------------------
# Tunables
# -----------------------------
ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
ITEM_PAIR_POINTS = 5
DESCRIPTION_LENGTH_DIVISOR = 3
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10
AFTERNOON_START = 1400  # exclusive
AFTERNOON_END = 1600    # exclusive

ALNUM_RE = re.compile(r"[A-Za-z0-9]")
# whitespace and line terminators a receipt description is trimmed of
TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680\u2028\u2029\u202f\u205f\u3000\ufeff"
    + "".join(chr(c) for c in range(0x2000, 0x200B))
)

Rule = Callable[[Receipt], Tuple[int, str]]


def _is_integral(amount: Decimal) -> bool:
    return amount == amount.to_integral_value()

def trimmed_length(text: str) -> int:
    """Length in UTF-16 code units after trimming; an emoji counts as 2."""
    return len(text.strip(TRIM_CHARS).encode("utf-16-le", "surrogatepass")) // 2

# -----------------------------
# Rules: each returns (points, reason)
# -----------------------------
def retailer_alphanumerics(receipt: Receipt) -> Tuple[int, str]:
    """One point per ASCII letter or digit in the retailer name, untrimmed."""
    return len(ALNUM_RE.findall(receipt.retailer)), "retailer_alphanumerics"

def round_dollar_total(receipt: Receipt) -> Tuple[int, str]:
    points = ROUND_DOLLAR_POINTS if _is_integral(receipt.total) else 0
    return points, "round_dollar_total"

def quarter_multiple_total(receipt: Receipt) -> Tuple[int, str]:
    # total % 0.25 == 0  <=>  total * 4 is whole
    points = QUARTER_MULTIPLE_POINTS if _is_integral(receipt.total * 4) else 0
    return points, "quarter_multiple_total"

def item_pairs(receipt: Receipt) -> Tuple[int, str]:
    return (len(receipt.items) // 2) * ITEM_PAIR_POINTS, "item_pairs"

def description_length_bonus(receipt: Receipt) -> Tuple[int, str]:
    """
    For every item whose trimmed description length is a multiple of 3,
    ceil(price * 0.2). Rounded per item, before summing.
    """
    points = 0
    for item in receipt.items:
        if trimmed_length(item.shortDescription) % DESCRIPTION_LENGTH_DIVISOR == 0:
            points += math.ceil(item.price * DESCRIPTION_PRICE_MULTIPLIER)
    return points, "description_length_bonus"

def odd_purchase_day(receipt: Receipt) -> Tuple[int, str]:
    day = int(receipt.purchaseDate.split("-")[2])
    return (ODD_DAY_POINTS if day % 2 == 1 else 0), "odd_purchase_day"

def afternoon_window(receipt: Receipt) -> Tuple[int, str]:
    """14:33 -> 1433; 14:00 and 16:00 themselves do not count."""
    hhmm = int(receipt.purchaseTime.replace(":", ""))
    hit = AFTERNOON_START < hhmm < AFTERNOON_END
    return (AFTERNOON_POINTS if hit else 0), "afternoon_window"


DEFAULT_RULES: List[Rule] = [
    retailer_alphanumerics,
    round_dollar_total,
    quarter_multiple_total,
    item_pairs,
    description_length_bonus,
    odd_purchase_day,
    afternoon_window,
]
