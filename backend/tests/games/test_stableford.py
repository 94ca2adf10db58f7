import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from golfbets.games import stableford
from golfbets.games.common import HoleInfo


@pytest.mark.parametrize(
    "strokes, par, standard, modified",
    [
        (1, 5, 5, 8),  # better than albatross still caps
        (2, 5, 5, 8),
        (3, 5, 4, 5),
        (4, 5, 3, 3),
        (4, 4, 2, 1),
        (5, 4, 1, 0),
        (6, 4, 0, -1),
        (7, 4, 0, -3),
        (10, 3, 0, -3),
    ],
    ids=["ace-par5", "albatross", "eagle", "birdie", "par", "bogey", "double", "triple", "worse"],
)
def test_points_tables(strokes, par, standard, modified):
    assert stableford.get_stableford_points(strokes, par) == standard
    assert stableford.get_stableford_points(strokes, par, modified=True) == modified


def test_standings_use_par_and_default_to_four(two_players, make_scores):
    holes = [HoleInfo(1, 3), HoleInfo(2, 5)]
    scores = make_scores([(3, 4), (4, 7), (4, 4)], ["a", "b"])

    result = stableford.calculate_stableford(scores, two_players, holes)

    totals = {s.player_id: s.total_points for s in result.standings}
    # a: par, birdie, par on the unlisted hole; b: bogey, double, par
    assert totals == {"a": 7, "b": 3}
    assert result.standings[0].player_id == "a"
    assert result.holes_scored == 3
    assert [hp.points for hp in result.standings[0].hole_points] == [2, 3, 2]


def test_each_card_scores_on_its_own(two_players, make_scores):
    scores = make_scores([(4, 4), (3, None)], ["a", "b"])
    result = stableford.calculate_stableford(scores, two_players, [])

    totals = {s.player_id: s.total_points for s in result.standings}
    assert totals == {"a": 5, "b": 2}
    assert result.holes_scored == 2


def test_net_strokes_and_modified_table(two_players, make_scores):
    scores = make_scores([(6, 6)], ["a", "b"])
    result = stableford.calculate_stableford(
        scores, two_players, [], modified=True, strokes_per_hole={"b": {1: 2}}
    )
    totals = {s.player_id: s.total_points for s in result.standings}
    assert totals == {"a": -1, "b": 1}
    assert result.modified is True


@pytest.mark.parametrize(
    "points, label",
    [(8, "Albatross!"), (4, "Eagle"), (3, "Birdie"), (2, "Par"), (1, "Bogey"), (0, "No Points"), (-3, "-3 pts")],
)
def test_points_label(points, label):
    assert stableford.get_points_label(points) == label
