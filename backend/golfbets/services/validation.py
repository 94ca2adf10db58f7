from typing import Iterable, Set

from ..games.configs import BestBallConfig, WolfConfig
from ..games.nassau import MAX_PRESSES
from .rounds import RoundSnapshot
from .settlement import PROP_BET_TYPES

MAX_PLAYERS = 4
HOLES_IN_ROUND = (9, 18)


class ValidationError(Exception):
    """Raised when a submitted round snapshot is inconsistent."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def _check_known(ids: Iterable[str], known: Set[str], what: str) -> None:
    for pid in ids:
        if pid not in known:
            raise ValidationError(f"{what} references unknown player '{pid}'.")


def _check_hole(hole: int, holes_in_round: int, what: str) -> None:
    if hole < 1 or hole > holes_in_round:
        raise ValidationError(
            f"{what} hole {hole} is outside the round (1-{holes_in_round})."
        )


def validate_players(snapshot: RoundSnapshot) -> Set[str]:
    players = snapshot.players
    if not players:
        raise ValidationError("At least one player is required.")
    if len(players) > MAX_PLAYERS:
        raise ValidationError(f"Too many players. Max allowed is {MAX_PLAYERS}.")
    ids = [p.id for p in players]
    if len(set(ids)) != len(ids):
        raise ValidationError("Player ids must be unique.")
    return set(ids)


def validate_scores(snapshot: RoundSnapshot, known: Set[str]) -> None:
    for i, score in enumerate(snapshot.scores, start=1):
        _check_known([score.player_id], known, f"Score #{i}")
        _check_hole(score.hole_number, snapshot.holes_in_round, f"Score #{i}")
        # Reject booleans explicitly (bool is a subclass of int in Python)
        if isinstance(score.strokes, bool) or score.strokes < 1:
            raise ValidationError(f"Score #{i} strokes must be a positive integer.")
    _check_known(snapshot.strokes_per_hole.keys(), known, "Handicap strokes")


def validate_games(snapshot: RoundSnapshot, known: Set[str]) -> None:
    game_ids = [g.id for g in snapshot.games]
    if len(set(game_ids)) != len(game_ids):
        raise ValidationError("Game ids must be unique.")
    seen = set()
    for game in snapshot.games:
        if game.type in seen:
            raise ValidationError(f"Only one {game.type} game is allowed per round.")
        seen.add(game.type)

        if isinstance(game, BestBallConfig):
            assigned: Set[str] = set()
            for team in game.teams:
                _check_known(team.player_ids, known, f"Team '{team.name}'")
                if assigned & set(team.player_ids):
                    raise ValidationError("A player can only be on one team.")
                assigned |= set(team.player_ids)
        elif isinstance(game, WolfConfig):
            holes = [d.hole_number for d in game.decisions]
            if len(set(holes)) != len(holes):
                raise ValidationError("Only one wolf decision is allowed per hole.")
            for decision in game.decisions:
                _check_hole(decision.hole_number, snapshot.holes_in_round, "Wolf decision")
                if decision.partner_id is not None:
                    _check_known([decision.partner_id], known, "Wolf decision")
                if decision.partner_id is not None and decision.blind:
                    raise ValidationError(
                        f"Wolf decision on hole {decision.hole_number} cannot be blind with a partner."
                    )


def validate_side_bets(snapshot: RoundSnapshot, known: Set[str]) -> None:
    if len(snapshot.presses) > MAX_PRESSES:
        raise ValidationError(f"Too many presses. Max allowed is {MAX_PRESSES}.")
    for press in snapshot.presses:
        _check_known([press.initiated_by], known, "Press")
        _check_hole(press.start_hole, snapshot.holes_in_round, "Press")

    for bet in snapshot.prop_bets:
        if bet.type not in PROP_BET_TYPES:
            formatted = ", ".join(PROP_BET_TYPES)
            raise ValidationError(f"Prop bet type must be one of {formatted}.")
        _check_hole(bet.hole_number, snapshot.holes_in_round, "Prop bet")
        if bet.winner_id is not None:
            _check_known([bet.winner_id], known, "Prop bet")


def validate_round_snapshot(snapshot: RoundSnapshot) -> None:
    """Reject a snapshot whose parts do not agree with each other.

    Rules:
    - 1 to ``MAX_PLAYERS`` players with unique ids
    - the round is 9 or 18 holes
    - scores, presses, prop bets, teams and wolf partners name known players
    - every hole reference falls inside the round
    - at most one game of each type
    """
    if snapshot.holes_in_round not in HOLES_IN_ROUND:
        raise ValidationError("Rounds must be 9 or 18 holes.")
    known = validate_players(snapshot)
    validate_scores(snapshot, known)
    validate_games(snapshot, known)
    validate_side_bets(snapshot, known)
