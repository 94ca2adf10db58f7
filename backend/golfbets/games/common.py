"""Shared value types and helpers for the side-game calculators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

DEFAULT_PAR = 4

# player id -> hole number -> handicap strokes granted on that hole
StrokesPerHole = Mapping[str, Mapping[int, int]]


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    handicap: Optional[float] = None
    order_index: int = 0

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else self.name


@dataclass(frozen=True)
class Score:
    player_id: str
    hole_number: int
    strokes: int


@dataclass(frozen=True)
class HoleInfo:
    number: int
    par: int = DEFAULT_PAR
    handicap: Optional[int] = None
    distance: Optional[int] = None


@dataclass(frozen=True)
class Settlement:
    """A single game-reported payment, before cross-game netting."""

    from_player_id: str
    from_player_name: str
    to_player_id: str
    to_player_name: str
    amount_cents: int
    description: str = ""


def par_for(hole_info: Sequence[HoleInfo], hole_number: int) -> int:
    for hole in hole_info:
        if hole.number == hole_number:
            return hole.par
    return DEFAULT_PAR


def strokes_received(
    strokes_per_hole: Optional[StrokesPerHole], player_id: str, hole_number: int
) -> int:
    if not strokes_per_hole:
        return 0
    return int((strokes_per_hole.get(player_id) or {}).get(hole_number, 0) or 0)


def net_score(
    gross: int,
    strokes_per_hole: Optional[StrokesPerHole],
    player_id: str,
    hole_number: int,
) -> int:
    """Gross strokes minus the handicap strokes granted on the hole."""
    return gross - strokes_received(strokes_per_hole, player_id, hole_number)


class ScoreBook:
    """Latest gross score per (player, hole) for the players in a round.

    Scores for players outside the round are ignored. When the same
    (player, hole) pair appears more than once the last one wins.
    """

    def __init__(self, scores: Iterable[Score], players: Sequence[Player]) -> None:
        self.player_ids: List[str] = [p.id for p in players]
        known = set(self.player_ids)
        self._by_hole: Dict[int, Dict[str, int]] = {}
        for score in scores:
            if score.player_id not in known:
                continue
            self._by_hole.setdefault(score.hole_number, {})[score.player_id] = score.strokes

    def gross(self, player_id: str, hole_number: int) -> Optional[int]:
        return self._by_hole.get(hole_number, {}).get(player_id)

    def hole_scores(self, hole_number: int) -> Dict[str, int]:
        row = self._by_hole.get(hole_number, {})
        return {pid: row[pid] for pid in self.player_ids if pid in row}

    def is_complete(self, hole_number: int) -> bool:
        """Every player in the round has a score for the hole."""
        if not self.player_ids:
            return False
        row = self._by_hole.get(hole_number, {})
        return all(pid in row for pid in self.player_ids)

    def net_scores(
        self, hole_number: int, strokes_per_hole: Optional[StrokesPerHole]
    ) -> Dict[str, int]:
        return {
            pid: net_score(gross, strokes_per_hole, pid, hole_number)
            for pid, gross in self.hole_scores(hole_number).items()
        }

    def holes_scored(self) -> List[int]:
        return sorted(h for h, row in self._by_hole.items() if row)

    def truncated(self, up_to_hole: int) -> "ScoreBook":
        clone = ScoreBook([], [])
        clone.player_ids = list(self.player_ids)
        clone._by_hole = {
            h: dict(row) for h, row in self._by_hole.items() if h <= up_to_hole
        }
        return clone


def player_lookup(players: Sequence[Player]) -> Dict[str, Player]:
    return {p.id: p for p in players}


def classify_urgency(margin: int, holes_remaining: int) -> tuple[str, str]:
    """Return ``(urgency, message)`` for a head-to-head standing.

    ``margin`` is the absolute lead and ``holes_remaining`` counts the current
    hole. All square is an opportunity to take the lead, a deficit that can
    only just be recovered (or worse) is critical, as is being two or more
    down.
    """
    if margin == 0:
        return "opportunity", "Win to go 1 UP"
    if holes_remaining > 0 and margin >= holes_remaining:
        return "critical", "Must win to stay alive"
    if margin >= 2:
        return "critical", f"{margin} down, time to make a move"
    return "normal", f"{margin} UP with {holes_remaining} to play"
