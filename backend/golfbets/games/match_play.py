"""Two-player match play: holes won, not strokes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .common import HoleInfo, Player, Score, ScoreBook, StrokesPerHole, strokes_received

NOT_STARTED = "not_started"
ONGOING = "ongoing"
DORMIE = "dormie"
WON = "won"
HALVED = "halved"


@dataclass(frozen=True)
class MatchPlayHoleResult:
    hole_number: int
    winner_id: Optional[str]  # None = halved
    gross_scores: Dict[str, int]
    net_scores: Dict[str, int]
    strokes_received: Dict[str, int]


@dataclass(frozen=True)
class MatchPlayResult:
    hole_results: List[MatchPlayHoleResult] = field(default_factory=list)
    leader_id: Optional[str] = None
    holes_up: int = 0
    holes_played: int = 0
    holes_remaining: int = 0
    match_status: str = NOT_STARTED
    winner_id: Optional[str] = None
    status_text: str = "Match not started"
    win_margin: Optional[str] = None


def calculate_match_play(
    scores: Sequence[Score],
    players: Sequence[Player],
    hole_info: Sequence[HoleInfo],
    strokes_per_hole: Optional[StrokesPerHole],
    total_holes: int = 18,
) -> MatchPlayResult:
    """Play the match over holes ``1..total_holes``.

    A hole counts once both players have a score for it. ``hole_info`` is
    accepted for symmetry with the other calculators; match play never
    needs par.
    """
    if len(players) != 2:
        return MatchPlayResult(
            holes_remaining=total_holes,
            status_text="Match Play requires 2 players",
        )

    p1, p2 = players
    book = ScoreBook(scores, players)
    hole_results: List[MatchPlayHoleResult] = []
    p1_won = p2_won = 0

    for hole in range(1, total_holes + 1):
        if not book.is_complete(hole):
            continue
        gross = book.hole_scores(hole)
        received = {pid: strokes_received(strokes_per_hole, pid, hole) for pid in (p1.id, p2.id)}
        net = {pid: gross[pid] - received[pid] for pid in (p1.id, p2.id)}

        winner_id = None
        if net[p1.id] < net[p2.id]:
            winner_id = p1.id
            p1_won += 1
        elif net[p2.id] < net[p1.id]:
            winner_id = p2.id
            p2_won += 1
        hole_results.append(MatchPlayHoleResult(hole, winner_id, gross, net, received))

    holes_played = len(hole_results)
    holes_remaining = total_holes - holes_played
    diff = p1_won - p2_won
    holes_up = abs(diff)
    leader = p1 if diff > 0 else p2 if diff < 0 else None
    leader_id = leader.id if leader else None

    status = ONGOING
    winner_id = None
    win_margin = None
    if holes_played == 0:
        status = NOT_STARTED
        text = "Match not started"
    elif holes_up > holes_remaining:
        status = WON
        winner_id = leader_id
        win_margin = f"{holes_up} UP" if holes_remaining == 0 else f"{holes_up}&{holes_remaining}"
        text = f"{leader.name} wins {win_margin}"
    elif holes_up == holes_remaining and holes_up > 0:
        status = DORMIE
        text = f"{leader.name} {holes_up} UP (Dormie)"
    elif holes_remaining == 0 and holes_up == 0:
        status = HALVED
        text = "Match Halved"
    elif holes_up == 0:
        text = "All Square"
    else:
        text = f"{leader.name} {holes_up} UP"

    return MatchPlayResult(
        hole_results=hole_results,
        leader_id=leader_id,
        holes_up=holes_up,
        holes_played=holes_played,
        holes_remaining=holes_remaining,
        match_status=status,
        winner_id=winner_id,
        status_text=text,
        win_margin=win_margin,
    )


def get_match_play_status_brief(result: MatchPlayResult) -> str:
    """Short form for scoreboards: ``2 UP``, ``AS``, ``3&2``."""
    if result.match_status == WON:
        return result.win_margin or "Won"
    if result.match_status == HALVED:
        return "Halved"
    if result.holes_up == 0:
        return "AS"
    return f"{result.holes_up} UP"
