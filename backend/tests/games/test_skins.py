import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from golfbets.games import skins


IDS = ["a", "b", "c"]


def test_tie_carries_into_next_hole(three_players, make_scores):
    scores = make_scores([(4, 4, 5), (3, 4, 4), (4, 4, 4)], IDS)
    result = skins.calculate_skins(scores, three_players, 3, 5)

    assert [r.winner_id for r in result.results] == [None, "a", None]
    assert result.results[1].value == 2
    assert result.carryover == 1
    assert result.holes_played == 3
    assert result.skins_awarded == 2
    assert result.pot_per_skin_cents == 1500

    earnings = {s.player_id: s.earnings_cents for s in result.standings}
    assert earnings == {"a": 2000, "b": -1000, "c": -1000}
    assert result.standings[0].player_id == "a"


def test_carryover_resets_after_a_clear_win(three_players, make_scores):
    scores = make_scores([(4, 4, 4), (4, 4, 4), (3, 4, 5), (5, 4, 5)], IDS)
    result = skins.calculate_skins(scores, three_players, 4, 1)

    assert [r.value for r in result.results] == [0, 0, 3, 1]
    assert result.carryover == 0
    assert {s.player_id: s.skins for s in result.standings} == {"a": 3, "b": 1, "c": 0}


def test_ties_are_lost_without_carryover(three_players, make_scores):
    scores = make_scores([(4, 4, 5), (3, 4, 4), (4, 4, 4)], IDS)
    result = skins.calculate_skins(scores, three_players, 3, 5, carryover=False)

    assert result.results[1].value == 1
    assert result.skins_awarded == 1
    assert result.skins_lost == 2
    assert result.carryover == 0
    assert sum(s.earnings_cents for s in result.standings) == 0


@pytest.mark.parametrize(
    "rows, carryover",
    [
        ([(4, 4, 4)] * 9, True),
        ([(4, 4, 4)] * 9, False),
        ([(3, 4, 4), (4, 4, 4), (5, 4, 4), (4, 4, 3), (4, 4, 4)], True),
        ([(4, 5, 6), (5, 5, 6), (6, 5, 5), (3, 3, 3), (2, 4, 4)], False),
    ],
    ids=["all-pushed", "all-lost", "mixed-carry", "mixed-no-carry"],
)
def test_every_completed_hole_is_accounted_for(three_players, make_scores, rows, carryover):
    result = skins.calculate_skins(make_scores(rows, IDS), three_players, len(rows), 2.5, carryover)

    assert result.skins_awarded + result.carryover + result.skins_lost == result.holes_played
    assert sum(s.earnings_cents for s in result.standings) == 0


def test_incomplete_holes_do_not_count(three_players, make_scores):
    scores = make_scores([(4, 5, 5), (3, None, 4)], IDS)
    result = skins.calculate_skins(scores, three_players, 2, 5)

    assert result.holes_played == 1
    assert [r.hole_number for r in result.results] == [1]


def test_net_scores_decide_the_skin(three_players, make_scores):
    scores = make_scores([(5, 4, 4)], IDS)
    strokes = {"a": {1: 2}}

    gross = skins.calculate_skins(scores, three_players, 1, 5)
    net = skins.calculate_skins(scores, three_players, 1, 5, strokes_per_hole=strokes)

    assert gross.results[0].winner_id is None
    assert net.results[0].winner_id == "a"


def test_bad_stakes_count_as_zero(three_players, make_scores):
    scores = make_scores([(3, 4, 4)], IDS)
    result = skins.calculate_skins(scores, three_players, 1, "lots")

    assert result.pot_per_skin_cents == 0
    assert all(s.earnings_cents == 0 for s in result.standings)


def test_hole_result_summary(three_players, make_scores):
    scores = make_scores([(4, 4, 5), (3, 4, 4)], IDS)
    result = skins.calculate_skins(scores, three_players, 2, 5)

    pushed = skins.get_skins_hole_result(result.results, 1, three_players)
    won = skins.get_skins_hole_result(result.results, 2, three_players)
    missing = skins.get_skins_hole_result(result.results, 3, three_players)

    assert pushed.is_carryover and pushed.winner_id is None
    assert (won.winner_name, won.value) == ("Alice Smith", 2)
    assert missing == skins.SkinsHoleSummary(None, None, 0, False)


def test_hole_context_includes_carryovers(three_players, make_scores):
    scores = make_scores([(4, 4, 5)], IDS)

    context = skins.get_skins_hole_context(scores, three_players, 2, 5)
    assert context.carryovers == 1
    assert context.pot_value_cents == 3000
    assert context.message == "$30.00 (1 carryover)"

    opening = skins.get_skins_hole_context([], three_players, 1, 5)
    assert opening.message == "$15.00"
