from decimal import Decimal
from fractions import Fraction

import pytest
from pydantic import ValidationError

from golfbets.games.configs import NassauConfig, WolfConfig
from golfbets.games.nassau import Press
from golfbets.schemas import RoundSnapshotIn, to_jsonable


PAYLOAD = {
    "players": [
        {"id": "a", "name": " Alice Smith ", "handicap": 4},
        {"id": "b", "name": "Bob Jones", "orderIndex": 1},
    ],
    "scores": [{"playerId": "a", "holeNumber": 1, "strokes": 4}],
    "holeInfo": [{"number": 1, "par": 3}],
    "games": [
        {"type": "nassau", "stakes": "10", "autoPress": True},
        {"type": "wolf", "id": "w", "stakes": 2, "decisions": [{"holeNumber": 1, "blind": True}]},
    ],
    "presses": [{"id": "x", "startHole": 3, "initiatedBy": "b", "stakes": 5}],
    "propBets": [{"type": "ctp", "holeNumber": 3, "stakes": 2, "winnerId": "a"}],
    "strokesPerHole": {"b": {"1": 1}},
    "holesInRound": 18,
}


def test_snapshot_converts_to_domain():
    snapshot = RoundSnapshotIn.model_validate(PAYLOAD).to_domain()

    assert snapshot.players[0].name == "Alice Smith"
    assert snapshot.players[1].order_index == 1
    assert snapshot.hole_info[0].par == 3
    assert snapshot.strokes_per_hole == {"b": {1: 1}}
    assert snapshot.presses == (Press("x", 3, "b", 500),)

    nassau, wolf = snapshot.games
    assert isinstance(nassau, NassauConfig)
    assert (nassau.id, nassau.auto_press, nassau.stakes) == ("nassau", True, Decimal("10.00"))
    assert isinstance(wolf, WolfConfig)
    assert wolf.decisions[0].blind is True


def test_bad_stakes_become_zero(caplog):
    payload = dict(PAYLOAD, games=[{"type": "skins", "stakes": "a lot"}])
    with caplog.at_level("WARNING"):
        snapshot = RoundSnapshotIn.model_validate(payload).to_domain()
    assert snapshot.games[0].stakes == Decimal("0.00")
    assert "non-numeric stake" in caplog.text


@pytest.mark.parametrize(
    "changes",
    [
        {"games": [{"type": "bingo"}]},
        {"games": [{"type": "skins", "surprise": True}]},
        {"players": []},
        {"players": [{"id": "  ", "name": "Blank"}]},
        {"scores": [{"playerId": "a", "holeNumber": 1, "strokes": 0}]},
        {"games": [{"type": "wolf", "decisions": [{"holeNumber": 1, "partnerId": "b", "blind": True}]}]},
    ],
    ids=["unknown-game", "extra-field", "no-players", "blank-id", "zero-strokes", "blind-partner"],
)
def test_rejects_malformed_payloads(changes):
    with pytest.raises(ValidationError):
        RoundSnapshotIn.model_validate(dict(PAYLOAD, **changes))


def test_to_jsonable_reports_dollars_in_camel_case():
    press = Press("x", 3, "b", 1250)
    assert to_jsonable(press) == {
        "id": "x",
        "startHole": 3,
        "initiatedBy": "b",
        "stakes": 12.5,
        "status": "active",
    }
    assert to_jsonable({1: [Fraction(1, 4)]}) == {"1": [0.25]}
