import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from golfbets.games.common import Player, Score


def _scores_from(rows, player_ids):
    return [
        Score(pid, hole, strokes)
        for hole, row in enumerate(rows, start=1)
        for pid, strokes in zip(player_ids, row)
        if strokes is not None
    ]


@pytest.fixture
def make_scores():
    """Build scores from one row of strokes per hole, columns in player order.

    ``None`` leaves that player without a score on the hole.
    """
    return _scores_from


@pytest.fixture
def two_players():
    return (
        Player("a", "Alice Smith", handicap=4, order_index=0),
        Player("b", "Bob Jones", handicap=12, order_index=1),
    )


@pytest.fixture
def three_players():
    return (
        Player("a", "Alice Smith", order_index=0),
        Player("b", "Bob Jones", order_index=1),
        Player("c", "Cara Diaz", order_index=2),
    )


@pytest.fixture
def four_players():
    return (
        Player("p1", "Pat Lee", order_index=0),
        Player("p2", "Quinn Moss", order_index=1),
        Player("p3", "Riley Ng", order_index=2),
        Player("p4", "Sam Ortiz", order_index=3),
    )
