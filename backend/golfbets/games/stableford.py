"""Stableford points scoring (standard and modified tables)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .common import HoleInfo, Player, Score, ScoreBook, StrokesPerHole, net_score, par_for

# relative-to-par -> points; anything better than the lowest key uses it,
# anything worse than the highest key uses the "worse" value.
STANDARD_POINTS = {-3: 5, -2: 4, -1: 3, 0: 2, 1: 1, 2: 0, "worse": 0}
MODIFIED_POINTS = {-3: 8, -2: 5, -1: 3, 0: 1, 1: 0, 2: -1, "worse": -3}


def get_stableford_points(strokes: int, par: int, modified: bool = False) -> int:
    table = MODIFIED_POINTS if modified else STANDARD_POINTS
    relative = strokes - par
    if relative <= -3:
        return table[-3]
    if relative > 2:
        return table["worse"]
    return table[relative]


def get_points_label(points: int) -> str:
    if points >= 5:
        return "Albatross!"
    labels = {4: "Eagle", 3: "Birdie", 2: "Par", 1: "Bogey", 0: "No Points"}
    return labels.get(points, f"{points} pts")


@dataclass(frozen=True)
class HolePoints:
    hole: int
    points: int


@dataclass(frozen=True)
class StablefordStanding:
    player_id: str
    player_name: str
    total_points: int
    hole_points: List[HolePoints] = field(default_factory=list)


@dataclass(frozen=True)
class StablefordResult:
    standings: List[StablefordStanding]
    modified: bool
    holes_scored: int


def calculate_stableford(
    scores: Sequence[Score],
    players: Sequence[Player],
    hole_info: Sequence[HoleInfo],
    modified: bool = False,
    strokes_per_hole: Optional[StrokesPerHole] = None,
) -> StablefordResult:
    book = ScoreBook(scores, players)
    holes = book.holes_scored()
    hole_points: Dict[str, List[HolePoints]] = {p.id: [] for p in players}

    for hole in holes:
        par = par_for(hole_info, hole)
        for pid, gross in book.hole_scores(hole).items():
            strokes = net_score(gross, strokes_per_hole, pid, hole)
            hole_points[pid].append(HolePoints(hole, get_stableford_points(strokes, par, modified)))

    standings = [
        StablefordStanding(
            player_id=p.id,
            player_name=p.name,
            total_points=sum(hp.points for hp in hole_points[p.id]),
            hole_points=hole_points[p.id],
        )
        for p in players
    ]
    standings.sort(key=lambda s: -s.total_points)
    return StablefordResult(standings=standings, modified=modified, holes_scored=len(holes))
