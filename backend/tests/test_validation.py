import dataclasses

import pytest

from golfbets.games.best_ball import Team
from golfbets.games.common import Player, Score
from golfbets.games.configs import BestBallConfig, NassauConfig, SkinsConfig, WolfConfig
from golfbets.games.nassau import Press
from golfbets.games.wolf import WolfDecision
from golfbets.services.rounds import RoundSnapshot
from golfbets.services.settlement import PropBet
from golfbets.services.validation import ValidationError, validate_round_snapshot


PLAYERS = (
    Player("p1", "Pat"),
    Player("p2", "Quinn"),
    Player("p3", "Riley"),
    Player("p4", "Sam"),
)
BASE = RoundSnapshot(
    players=PLAYERS,
    scores=(Score("p1", 1, 4), Score("p2", 1, 5)),
    games=(SkinsConfig(stakes=1), WolfConfig(decisions=(WolfDecision(1, "p3"),))),
)


def test_accepts_valid_snapshot() -> None:
    validate_round_snapshot(BASE)
    validate_round_snapshot(dataclasses.replace(BASE, holes_in_round=9))


@pytest.mark.parametrize(
    "changes, msg",
    [
        ({"players": ()}, "At least one player"),
        ({"players": PLAYERS + (Player("p5", "Tay"),)}, "Too many players"),
        ({"players": (Player("p1", "Pat"), Player("p1", "Pat again"))}, "unique"),
        ({"holes_in_round": 12}, "9 or 18 holes"),
        ({"scores": (Score("zz", 1, 4),)}, "unknown player 'zz'"),
        ({"scores": (Score("p1", 19, 4),)}, "outside the round"),
        ({"scores": (Score("p1", 1, 0),)}, "positive integer"),
        ({"strokes_per_hole": {"zz": {1: 1}}}, "Handicap strokes"),
        ({"games": (SkinsConfig(), SkinsConfig(id="skins-2"))}, "Only one skins game"),
        ({"games": (SkinsConfig(), NassauConfig(id="skins"))}, "Game ids must be unique"),
        (
            {"games": (BestBallConfig(teams=(Team("t1", "One", ("p1", "zz")),)),)},
            "Team 'One' references unknown player",
        ),
        (
            {
                "games": (
                    BestBallConfig(
                        teams=(Team("t1", "One", ("p1", "p2")), Team("t2", "Two", ("p2", "p3")))
                    ),
                )
            },
            "only be on one team",
        ),
        ({"games": (WolfConfig(decisions=(WolfDecision(1, "zz"),)),)}, "Wolf decision"),
        ({"games": (WolfConfig(decisions=(WolfDecision(1), WolfDecision(1, "p2"))),)}, "one wolf decision"),
        ({"games": (WolfConfig(decisions=(WolfDecision(2, "p3", blind=True),)),)}, "cannot be blind"),
        ({"presses": tuple(Press(f"x{i}", 5, "p1", 100) for i in range(4))}, "Too many presses"),
        ({"presses": (Press("x", 3, "zz", 100),)}, "Press references unknown player"),
        ({"prop_bets": (PropBet("b1", "sandies", 3, 1),)}, "Prop bet type"),
        ({"prop_bets": (PropBet("b1", "ctp", 3, 1, winner_id="zz"),)}, "Prop bet references"),
    ],
    ids=[
        "no-players",
        "five-players",
        "duplicate-player",
        "odd-round-length",
        "score-unknown-player",
        "score-hole-out-of-range",
        "zero-strokes",
        "strokes-unknown-player",
        "two-skins-games",
        "duplicate-game-id",
        "team-unknown-player",
        "player-on-two-teams",
        "wolf-unknown-partner",
        "two-decisions-one-hole",
        "blind-with-partner",
        "too-many-presses",
        "press-unknown-player",
        "bad-prop-type",
        "prop-unknown-winner",
    ],
)
def test_rejects_inconsistent_snapshots(changes, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_round_snapshot(dataclasses.replace(BASE, **changes))
    assert msg.lower() in exc.value.detail.lower()
