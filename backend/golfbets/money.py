"""Integer-cent money helpers.

All ledgers inside the engine are kept in whole cents. Dollars only show up
when values come in from, or go out to, the API layer.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from fractions import Fraction
from typing import Any, Dict, Hashable, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)

CENTS_PER_DOLLAR = 100
_CENT = Decimal("0.01")


def to_cents(amount: Any, default: int = 0) -> int:
    """Convert a dollar amount to whole cents.

    Missing, non-numeric, non-finite and negative amounts fall back to
    ``default`` so a bad stake can never poison a ledger with ``NaN``.
    """
    if amount is None or isinstance(amount, bool):
        return default
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        logger.warning("Ignoring non-numeric stake %r", amount)
        return default
    if not value.is_finite() or value < 0:
        logger.warning("Ignoring invalid stake %r", amount)
        return default
    try:
        cents = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the decimal context can hold
        logger.warning("Ignoring out-of-range stake %r", amount)
        return default
    return int(cents * CENTS_PER_DOLLAR)


def cents_to_dollars(cents: int) -> Decimal:
    return (Decimal(cents) / CENTS_PER_DOLLAR).quantize(_CENT)


def round_preserving_sum(values: Sequence[Tuple[K, Fraction]]) -> Dict[K, int]:
    """Round exact amounts to whole cents without changing their total.

    Every value is floored, then the cents still missing from the (rounded)
    exact total go one at a time to the largest fractional remainders. Equal
    remainders are resolved by input order, so callers control the
    tie-break by how they order ``values``.
    """
    if not values:
        return {}
    exact_total = sum((Fraction(v) for _, v in values), Fraction(0))
    target = math.floor(exact_total + Fraction(1, 2))
    floors: Dict[K, int] = {}
    remainders = []
    for index, (key, value) in enumerate(values):
        value = Fraction(value)
        floored = math.floor(value)
        floors[key] = floored
        remainders.append((value - floored, index, key))
    missing = target - sum(floors.values())
    remainders.sort(key=lambda item: (-item[0], item[1]))
    for _, _, key in remainders[:missing]:
        floors[key] += 1
    return floors


def split_proportionally(
    total: int, weights: Sequence[Tuple[K, int]]
) -> Dict[K, int]:
    """Split ``total`` cents across ``weights`` so the parts sum to ``total``."""
    weight_sum = sum(w for _, w in weights if w > 0)
    if total <= 0 or weight_sum <= 0:
        return {}
    shares = [
        (key, Fraction(total * weight, weight_sum)) for key, weight in weights if weight > 0
    ]
    return round_preserving_sum(shares)
