from decimal import Decimal
from fractions import Fraction
import math

import pytest

from golfbets.money import cents_to_dollars, round_preserving_sum, split_proportionally, to_cents


@pytest.mark.parametrize(
    "amount, cents",
    [
        (10, 1000),
        (2.5, 250),
        ("2.505", 251),
        (Decimal("0.01"), 1),
        (None, 0),
        (True, 0),
        (-5, 0),
        (math.nan, 0),
        (math.inf, 0),
        ("abc", 0),
        (1e30, 0),
        ("1e30", 0),
    ],
    ids=[
        "int",
        "float",
        "half-cent",
        "decimal",
        "none",
        "bool",
        "negative",
        "nan",
        "inf",
        "text",
        "huge-float",
        "huge-text",
    ],
)
def test_to_cents(amount, cents):
    assert to_cents(amount) == cents


def test_to_cents_warns_on_garbage(caplog):
    with caplog.at_level("WARNING"):
        assert to_cents("ten dollars", default=7) == 7
    assert "non-numeric stake" in caplog.text


def test_to_cents_warns_on_out_of_range_stake(caplog):
    with caplog.at_level("WARNING"):
        assert to_cents(Decimal("1e40"), default=3) == 3
    assert "out-of-range stake" in caplog.text


def test_cents_to_dollars():
    assert cents_to_dollars(1250) == Decimal("12.50")
    assert cents_to_dollars(-3) == Decimal("-0.03")


def test_round_preserving_sum_breaks_ties_by_order():
    thirds = [(key, Fraction(100, 3)) for key in ("x", "y", "z")]
    assert round_preserving_sum(thirds) == {"x": 34, "y": 33, "z": 33}


def test_round_preserving_sum_keeps_zero_total():
    values = [("w", Fraction(16)), ("x", Fraction(-16, 3)), ("y", Fraction(-16, 3)), ("z", Fraction(-16, 3))]
    rounded = round_preserving_sum(values)
    assert sum(rounded.values()) == 0
    assert rounded["w"] == 16


def test_split_proportionally():
    assert split_proportionally(1000, [("a", 3), ("b", 1)]) == {"a": 750, "b": 250}
    assert split_proportionally(100, [("a", 1), ("b", 1), ("c", 1)]) == {"a": 34, "b": 33, "c": 33}
    assert split_proportionally(0, [("a", 1)]) == {}
    assert split_proportionally(100, [("a", 0)]) == {}
