"""Nassau: front nine, back nine and overall stroke-play bets, plus presses.

Each segment is its own bet between two players. A segment only pays once
every hole in it has been completed by both players. Presses are extra bets
started mid-round by the trailing player and run to the last hole.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..money import cents_to_dollars, to_cents
from .common import (
    Player,
    Score,
    ScoreBook,
    Settlement,
    StrokesPerHole,
    classify_urgency,
    net_score,
    player_lookup,
)

MAX_PRESSES = 3
PRESS_THRESHOLD = 2

PRESS_ACTIVE = "active"
PRESS_WON = "won"
PRESS_LOST = "lost"
PRESS_PUSHED = "pushed"


@dataclass(frozen=True)
class Press:
    id: str
    start_hole: int
    initiated_by: str
    stakes_cents: int
    status: str = PRESS_ACTIVE


@dataclass(frozen=True)
class NassauSegment:
    first_hole: int
    last_hole: int
    scores: Dict[str, int] = field(default_factory=dict)
    holes_played: int = 0
    leader_id: Optional[str] = None
    margin: int = 0  # strokes the leader is ahead by

    @property
    def length(self) -> int:
        return max(0, self.last_hole - self.first_hole + 1)

    @property
    def complete(self) -> bool:
        return self.length > 0 and self.holes_played == self.length

    @property
    def winner_id(self) -> Optional[str]:
        return self.leader_id if self.complete else None

    def standing(self, player_id: str) -> int:
        """Signed margin from ``player_id``'s side, negative when behind."""
        if self.leader_id is None:
            return 0
        return self.margin if self.leader_id == player_id else -self.margin


@dataclass(frozen=True)
class PressResult:
    press: Press
    segment: NassauSegment
    status: str


@dataclass(frozen=True)
class NassauResult:
    front9: NassauSegment
    back9: NassauSegment
    overall: NassauSegment
    presses: List[PressResult] = field(default_factory=list)
    settlements: List[Settlement] = field(default_factory=list)
    applicable: bool = True


def _segment(
    book: ScoreBook,
    player_ids: Sequence[str],
    first_hole: int,
    last_hole: int,
    strokes_per_hole: Optional[StrokesPerHole],
) -> NassauSegment:
    totals = {pid: 0 for pid in player_ids}
    played = 0
    for hole in range(first_hole, last_hole + 1):
        if not book.is_complete(hole):
            continue
        for pid, gross in book.hole_scores(hole).items():
            totals[pid] += net_score(gross, strokes_per_hole, pid, hole)
        played += 1

    leader_id = None
    margin = 0
    if played and len(totals) >= 2:
        ranked = sorted(totals.items(), key=lambda item: item[1])
        (best_id, best), (_, second) = ranked[0], ranked[1]
        if best < second:
            leader_id = best_id
            margin = second - best
    return NassauSegment(first_hole, last_hole, totals, played, leader_id, margin)


def _segment_bounds(holes_in_round: int) -> Dict[str, tuple[int, int]]:
    return {
        "front9": (1, min(9, holes_in_round)),
        "back9": (10, holes_in_round),
        "overall": (1, holes_in_round),
    }


def _settle(
    segment: NassauSegment,
    players: Dict[str, Player],
    amount_cents: int,
    description: str,
) -> Optional[Settlement]:
    winner_id = segment.winner_id
    if winner_id is None or amount_cents <= 0:
        return None
    loser_id = next(pid for pid in players if pid != winner_id)
    winner, loser = players[winner_id], players[loser_id]
    return Settlement(loser.id, loser.name, winner.id, winner.name, amount_cents, description)


def _press_status(press: Press, segment: NassauSegment) -> str:
    if press.status != PRESS_ACTIVE or not segment.complete:
        return press.status
    if segment.winner_id is None:
        return PRESS_PUSHED
    return PRESS_WON if segment.winner_id == press.initiated_by else PRESS_LOST


def calculate_nassau(
    scores: Sequence[Score],
    players: Sequence[Player],
    stakes,
    presses: Sequence[Press] = (),
    holes_in_round: int = 18,
    strokes_per_hole: Optional[StrokesPerHole] = None,
) -> NassauResult:
    bounds = _segment_bounds(holes_in_round)
    if len(players) != 2:
        return NassauResult(
            front9=NassauSegment(*bounds["front9"]),
            back9=NassauSegment(*bounds["back9"]),
            overall=NassauSegment(*bounds["overall"]),
            applicable=False,
        )

    book = ScoreBook(scores, players)
    ids = [p.id for p in players]
    front9 = _segment(book, ids, *bounds["front9"], strokes_per_hole)
    back9 = _segment(book, ids, *bounds["back9"], strokes_per_hole)
    overall = _segment(book, ids, *bounds["overall"], strokes_per_hole)

    lookup = player_lookup(players)
    stakes_cents = to_cents(stakes)
    settlements: List[Settlement] = []
    for segment, label in ((front9, "Front 9"), (back9, "Back 9"), (overall, "Overall")):
        settlement = _settle(segment, lookup, stakes_cents, label)
        if settlement:
            settlements.append(settlement)

    press_results: List[PressResult] = []
    for press in presses:
        if press.start_hole > holes_in_round:
            continue
        segment = _segment(book, ids, press.start_hole, holes_in_round, strokes_per_hole)
        press_results.append(PressResult(press, segment, _press_status(press, segment)))
        if press.status == PRESS_ACTIVE:
            settlement = _settle(
                segment, lookup, press.stakes_cents, f"Press (hole {press.start_hole})"
            )
            if settlement:
                settlements.append(settlement)

    return NassauResult(front9, back9, overall, press_results, settlements)


def can_press(
    current_hole: int,
    player_standing: int,
    existing_presses: Sequence[Press],
    holes_in_round: int = 18,
) -> bool:
    """A player may press when 2+ strokes down, under the press cap, with holes left."""
    return (
        player_standing <= -PRESS_THRESHOLD
        and len(existing_presses) < MAX_PRESSES
        and current_hole < holes_in_round
    )


def create_press(player_id: str, current_hole: int, stakes) -> Press:
    return Press(
        id=uuid.uuid4().hex,
        start_hole=current_hole,
        initiated_by=player_id,
        stakes_cents=to_cents(stakes),
    )


def _current_segment(result: NassauResult, hole: int) -> NassauSegment:
    return result.front9 if hole <= result.front9.last_hole else result.back9


def check_auto_press(
    scores: Sequence[Score],
    players: Sequence[Player],
    stakes,
    existing_presses: Sequence[Press],
    holes_in_round: int = 18,
    strokes_per_hole: Optional[StrokesPerHole] = None,
) -> Optional[Press]:
    """Return the press an auto-press round should open now, if any.

    The press starts on the hole after the last completed one. The trailing
    player gets at most one automatic press per nine.
    """
    if len(players) != 2:
        return None
    book = ScoreBook(scores, players)
    completed = [h for h in range(1, holes_in_round + 1) if book.is_complete(h)]
    if not completed:
        return None
    last_hole = completed[-1]
    next_hole = last_hole + 1

    result = calculate_nassau(
        scores, players, stakes, existing_presses, holes_in_round, strokes_per_hole
    )
    segment = _current_segment(result, next_hole)
    if segment.leader_id is None:
        return None
    trailer = next(p for p in players if p.id != segment.leader_id)
    if not can_press(last_hole, segment.standing(trailer.id), existing_presses, holes_in_round):
        return None
    for press in existing_presses:
        if press.start_hole == next_hole:
            return None
        if (
            press.initiated_by == trailer.id
            and segment.first_hole <= press.start_hole <= segment.last_hole
        ):
            return None
    return create_press(trailer.id, next_hole, stakes)


def format_nassau_status(
    leader_id: Optional[str], margin: int, players: Sequence[Player]
) -> str:
    if not leader_id or margin == 0:
        return "All square"
    leader = player_lookup(players).get(leader_id)
    if leader is None:
        return "All square"
    return f"{leader.name} {margin} UP"


@dataclass(frozen=True)
class NassauHoleContext:
    segment: str
    leader_id: Optional[str]
    margin: int
    holes_remaining: int
    status: str
    urgency: str
    message: str
    pot_cents: int

    @property
    def pot(self):
        return cents_to_dollars(self.pot_cents)


def get_nassau_hole_context(
    scores: Sequence[Score],
    players: Sequence[Player],
    current_hole: int,
    stakes,
    presses: Sequence[Press] = (),
    holes_in_round: int = 18,
    strokes_per_hole: Optional[StrokesPerHole] = None,
) -> NassauHoleContext:
    """Live standing of the nine ``current_hole`` belongs to."""
    result = calculate_nassau(scores, players, stakes, presses, holes_in_round, strokes_per_hole)
    segment = _current_segment(result, current_hole)
    name = "Front 9" if segment is result.front9 else "Back 9"
    holes_remaining = max(0, segment.last_hole - current_hole + 1)
    urgency, message = classify_urgency(segment.margin, holes_remaining)

    pot = to_cents(stakes) * 2  # this nine plus the overall
    pot += sum(
        p.stakes_cents
        for p in presses
        if p.status == PRESS_ACTIVE and p.start_hole <= current_hole
    )
    return NassauHoleContext(
        segment=name,
        leader_id=segment.leader_id,
        margin=segment.margin,
        holes_remaining=holes_remaining,
        status=format_nassau_status(segment.leader_id, segment.margin, players),
        urgency=urgency,
        message=message,
        pot_cents=pot,
    )
