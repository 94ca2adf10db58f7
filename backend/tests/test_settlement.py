from decimal import Decimal

from golfbets.games.common import Player, Settlement
from golfbets.games.nassau import NassauResult, NassauSegment
from golfbets.games.skins import calculate_skins
from golfbets.games.wolf import WolfDecision, calculate_wolf
from golfbets.services.settlement import (
    NetSettlement,
    PropBet,
    build_ledger,
    calculate_settlement,
    format_settlement_text,
    get_total_winnings,
)


def _nassau_with(*settlements):
    return NassauResult(
        front9=NassauSegment(1, 9),
        back9=NassauSegment(10, 18),
        overall=NassauSegment(1, 18),
        settlements=list(settlements),
    )


def _signed_total(settlements, players):
    return sum(get_total_winnings(p.id, settlements) for p in players)


def test_opposite_debts_net_to_one_payment():
    alice, bob = Player("a", "Alice"), Player("b", "Bob")
    nassau = _nassau_with(Settlement("a", "Alice", "b", "Bob", 1000, "Front 9"))
    prop = PropBet("ctp-3", "ctp", 3, 4, winner_id="a")

    settlements = calculate_settlement([alice, bob], nassau_result=nassau, prop_bets=[prop])

    assert settlements == [NetSettlement("a", "Alice", "b", "Bob", 600)]
    assert settlements[0].amount == Decimal("6.00")
    assert format_settlement_text(settlements[0]) == "Alice owes Bob $6"


def test_match_play_winner_collects(two_players):
    settlements = calculate_settlement(
        two_players, match_play_winner_id="b", match_play_stakes=20
    )
    assert [(s.from_player_id, s.to_player_id, s.amount_cents) for s in settlements] == [
        ("a", "b", 2000)
    ]


def test_prop_bet_winner_collects_from_everyone(three_players):
    bet = PropBet("ld-7", "longest_drive", 7, 5, winner_id="c")
    settlements = calculate_settlement(three_players, prop_bets=[bet])

    assert get_total_winnings("c", settlements) == 1000
    assert get_total_winnings("a", settlements) == -500
    assert bet.label == "Longest Drive"


def test_prop_bet_without_winner_is_ignored(three_players):
    bet = PropBet("ctp-3", "ctp", 3, 5)
    assert calculate_settlement(three_players, prop_bets=[bet]) == []


def test_skins_losers_pay_winners_proportionally(three_players, make_scores):
    scores = make_scores([(3, 4, 4)] * 3 + [(4, 3, 4)] * 2, ["a", "b", "c"])
    skins = calculate_skins(scores, three_players, 5, 1)

    ledger = build_ledger(three_players, skins_result=skins)
    # c is down 500 and pays a (400 up) and b (100 up) four to one
    assert ledger["c"] == {"a": 400, "b": 100}
    assert ledger["b"] == {"a": 0, "c": 0}

    settlements = calculate_settlement(three_players, skins_result=skins)
    assert _signed_total(settlements, three_players) == 0
    assert settlements[0].amount_cents >= settlements[-1].amount_cents


def test_every_game_together_is_zero_sum(four_players, make_scores):
    ids = ["p1", "p2", "p3", "p4"]
    scores = make_scores([(4, 4, 5, 5), (5, 3, 5, 5), (4, 5, 3, 6)], ids)
    skins = calculate_skins(scores, four_players, 3, 2.5)
    wolf = calculate_wolf(
        scores, four_players, [WolfDecision(1), WolfDecision(2), WolfDecision(3, "p4")], 1
    )
    props = [PropBet("ctp-2", "ctp", 2, 3.33, winner_id="p3")]

    settlements = calculate_settlement(
        four_players, skins_result=skins, wolf_result=wolf, prop_bets=props
    )

    assert _signed_total(settlements, four_players) == 0
    pairs = {frozenset((s.from_player_id, s.to_player_id)) for s in settlements}
    assert len(pairs) == len(settlements)


def test_settlement_text_rounds_to_whole_dollars():
    settlement = NetSettlement("a", "Alice", "b", "Bob", 2550)
    assert format_settlement_text(settlement) == "Alice owes Bob $26"


def test_skins_winners_collect_exactly_their_earnings(four_players, make_scores):
    ids = [p.id for p in four_players]
    scores = make_scores([(3, 4, 4, 4), (3, 4, 4, 4), (4, 3, 4, 4)], ids)
    result = calculate_skins(scores, four_players, 3, 0.25)
    earned = {s.player_id: s.earnings_cents for s in result.standings}
    assert earned == {"p1": 125, "p2": 25, "p3": -75, "p4": -75}

    settlements = calculate_settlement(four_players, skins_result=result)

    assert {pid: get_total_winnings(pid, settlements) for pid in ids} == earned


def test_wolf_winners_collect_exactly_their_earnings(four_players, make_scores):
    ids = [p.id for p in four_players]
    scores = make_scores([(4, 4, 5, 5), (5, 3, 4, 6), (3, 4, 5, 4)], ids)
    decisions = [WolfDecision(1), WolfDecision(2, partner_id="p3"), WolfDecision(3)]
    result = calculate_wolf(scores, four_players, decisions, 0.07)
    earned = {s.player_id: s.earnings_cents for s in result.standings}

    settlements = calculate_settlement(four_players, wolf_result=result)

    assert {pid: get_total_winnings(pid, settlements) for pid in ids} == earned
