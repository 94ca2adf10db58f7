"""Wolf: a four-player game with a rotating captain.

The wolf tees off last on their hole and either picks a partner for a 2v2
or goes it alone against the other three. A lone wolf may also declare
"blind" before anyone hits, which multiplies the base points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict, List, Optional, Sequence

from ..money import cents_to_dollars, round_preserving_sum, to_cents
from .common import Player, Score, ScoreBook, Settlement, StrokesPerHole, player_lookup

logger = logging.getLogger(__name__)

WOLF_PLAYERS = 4
BASE_POINTS = 4
LONE_WOLF_POINTS = 4
TEAM_POINTS_PER_PLAYER = 2
DEFAULT_BLIND_MULTIPLIER = 2

WOLF = "wolf"
HUNTERS = "hunters"
PUSH = "push"


@dataclass(frozen=True)
class WolfDecision:
    """What the wolf chose on a hole. ``partner_id`` of ``None`` is a lone wolf."""

    hole_number: int
    partner_id: Optional[str] = None
    blind: bool = False


@dataclass(frozen=True)
class WolfHoleResult:
    hole_number: int
    wolf_id: str
    partner_id: Optional[str]
    is_blind_wolf: bool
    winning_team: str
    points: int  # includes any carryover; 0 for a push


@dataclass(frozen=True)
class WolfStanding:
    player_id: str
    player_name: str
    total_points: Fraction
    times_as_wolf: int
    lone_wolf_wins: int
    blind_wolf_wins: int
    earnings_cents: int

    @property
    def earnings(self):
        return cents_to_dollars(self.earnings_cents)


@dataclass(frozen=True)
class WolfResult:
    results: List[WolfHoleResult] = field(default_factory=list)
    standings: List[WolfStanding] = field(default_factory=list)
    carryover: int = 0
    holes_played: int = 0
    applicable: bool = True


def _rotation(players: Sequence[Player]) -> List[Player]:
    return sorted(players, key=lambda p: p.order_index)


def get_wolf_for_hole(players: Sequence[Player], hole_number: int) -> Optional[Player]:
    if len(players) != WOLF_PLAYERS:
        return None
    return _rotation(players)[(hole_number - 1) % WOLF_PLAYERS]


def get_hunting_order(players: Sequence[Player], hole_number: int) -> List[Player]:
    """Tee order for the hole: hunters in rotation order, wolf last."""
    if len(players) != WOLF_PLAYERS:
        return list(players)
    ordered = _rotation(players)
    wolf_index = (hole_number - 1) % WOLF_PLAYERS
    hunters = [p for i, p in enumerate(ordered) if i != wolf_index]
    return hunters + [ordered[wolf_index]]


def _outcome(wolf_side: int, hunter_side: int) -> str:
    if wolf_side < hunter_side:
        return WOLF
    if wolf_side > hunter_side:
        return HUNTERS
    return PUSH


def calculate_wolf_hole_result(
    hole_number: int,
    wolf_id: str,
    partner_id: Optional[str],
    is_blind_wolf: bool,
    scores: Sequence[Score],
    players: Sequence[Player],
    strokes_per_hole: Optional[StrokesPerHole] = None,
    carryover: int = 0,
    blind_multiplier: int = DEFAULT_BLIND_MULTIPLIER,
) -> Optional[WolfHoleResult]:
    """Decide one hole. Returns ``None`` until all four players have scored."""
    book = ScoreBook(scores, players)
    if len(players) != WOLF_PLAYERS or not book.is_complete(hole_number):
        return None
    ids = [p.id for p in players]
    if wolf_id not in ids:
        return None
    nets = book.net_scores(hole_number, strokes_per_hole)

    if partner_id is None:
        hunters = [pid for pid in ids if pid != wolf_id]
        winning_team = _outcome(nets[wolf_id], min(nets[pid] for pid in hunters))
        base = LONE_WOLF_POINTS * (blind_multiplier if is_blind_wolf else 1)
        points = base * len(hunters) + carryover
        return WolfHoleResult(
            hole_number,
            wolf_id,
            None,
            is_blind_wolf,
            winning_team,
            0 if winning_team == PUSH else points,
        )

    if partner_id not in ids or partner_id == wolf_id:
        return None
    hunters = [pid for pid in ids if pid not in (wolf_id, partner_id)]
    wolf_best = min(nets[wolf_id], nets[partner_id])
    winning_team = _outcome(wolf_best, min(nets[pid] for pid in hunters))
    points = TEAM_POINTS_PER_PLAYER * 2 + carryover
    return WolfHoleResult(
        hole_number,
        wolf_id,
        partner_id,
        False,  # blind wolf only exists for a lone wolf
        winning_team,
        0 if winning_team == PUSH else points,
    )


def calculate_wolf_standings(
    results: Sequence[WolfHoleResult], players: Sequence[Player], stakes
) -> List[WolfStanding]:
    """Accumulate points per player and convert them to money.

    Winners split a hole's points evenly, losers are debited the same total,
    so every hole is zero-sum in points. Money is rounded to cents with a
    largest-remainder pass (ties go to the earlier player in ``players``) so
    the standings also sum to exactly zero.
    """
    points: Dict[str, Fraction] = {p.id: Fraction(0) for p in players}
    times_as_wolf = {p.id: 0 for p in players}
    lone_wins = {p.id: 0 for p in players}
    blind_wins = {p.id: 0 for p in players}

    for result in results:
        if result.wolf_id not in points:
            continue
        times_as_wolf[result.wolf_id] += 1
        if result.winning_team == PUSH:
            continue

        wolf_team = [result.wolf_id] + ([result.partner_id] if result.partner_id else [])
        hunters = [pid for pid in points if pid not in wolf_team]
        if result.winning_team == WOLF:
            winners, losers = wolf_team, hunters
            if result.partner_id is None:
                lone_wins[result.wolf_id] += 1
                if result.is_blind_wolf:
                    blind_wins[result.wolf_id] += 1
        else:
            winners, losers = hunters, wolf_team

        for pid in winners:
            points[pid] += Fraction(result.points, len(winners))
        for pid in losers:
            points[pid] -= Fraction(result.points, len(losers))

    stakes_cents = to_cents(stakes)
    earnings = round_preserving_sum([(p.id, points[p.id] * stakes_cents) for p in players])

    standings = [
        WolfStanding(
            player_id=p.id,
            player_name=p.name,
            total_points=points[p.id],
            times_as_wolf=times_as_wolf[p.id],
            lone_wolf_wins=lone_wins[p.id],
            blind_wolf_wins=blind_wins[p.id],
            earnings_cents=earnings.get(p.id, 0),
        )
        for p in players
    ]
    standings.sort(key=lambda s: -s.total_points)
    return standings


def calculate_wolf(
    scores: Sequence[Score],
    players: Sequence[Player],
    decisions: Sequence[WolfDecision],
    stakes,
    carryover: bool = True,
    strokes_per_hole: Optional[StrokesPerHole] = None,
    blind_multiplier: int = DEFAULT_BLIND_MULTIPLIER,
    holes_in_round: int = 18,
) -> WolfResult:
    """Score every completed hole that has a recorded decision.

    A push with carryover enabled adds ``BASE_POINTS`` to the next decided
    hole; any decided hole resets it.
    """
    if len(players) != WOLF_PLAYERS:
        return WolfResult(applicable=False)

    by_hole: Dict[int, WolfDecision] = {}
    for decision in decisions:
        by_hole[decision.hole_number] = decision

    results: List[WolfHoleResult] = []
    carry = 0
    for hole in range(1, holes_in_round + 1):
        decision = by_hole.get(hole)
        if decision is None:
            continue
        wolf = get_wolf_for_hole(players, hole)
        result = calculate_wolf_hole_result(
            hole,
            wolf.id,
            decision.partner_id,
            decision.blind,
            scores,
            players,
            strokes_per_hole,
            carry,
            blind_multiplier,
        )
        if result is None:
            if decision.partner_id is not None and decision.partner_id not in {
                p.id for p in players
            }:
                logger.warning(
                    "Ignoring wolf decision on hole %d: unknown partner %r",
                    hole,
                    decision.partner_id,
                )
            continue
        results.append(result)
        if result.winning_team == PUSH:
            carry = carry + BASE_POINTS if carryover else 0
        else:
            carry = 0

    return WolfResult(
        results=results,
        standings=calculate_wolf_standings(results, players, stakes),
        carryover=carry,
        holes_played=len(results),
    )


@dataclass(frozen=True)
class WolfHoleContext:
    wolf_id: str
    wolf_name: str
    partner_id: Optional[str]
    partner_name: Optional[str]
    is_blind_wolf: bool
    is_lone_wolf: bool
    decision_made: bool
    pot_value_cents: int
    carryovers: int
    message: str


def get_wolf_hole_context(
    players: Sequence[Player],
    current_hole: int,
    results: Sequence[WolfHoleResult],
    stakes,
    carryover_enabled: bool = True,
) -> Optional[WolfHoleContext]:
    wolf = get_wolf_for_hole(players, current_hole)
    if wolf is None:
        return None

    carry_points = 0
    pushes = 0
    for result in sorted(results, key=lambda r: r.hole_number):
        if result.hole_number >= current_hole:
            break
        if result.winning_team == PUSH and carryover_enabled:
            carry_points += BASE_POINTS
            pushes += 1
        else:
            carry_points = 0
            pushes = 0
    pot = to_cents(stakes) * (BASE_POINTS + carry_points)

    current = next((r for r in results if r.hole_number == current_hole), None)
    if current is None:
        return WolfHoleContext(
            wolf_id=wolf.id,
            wolf_name=wolf.first_name,
            partner_id=None,
            partner_name=None,
            is_blind_wolf=False,
            is_lone_wolf=False,
            decision_made=False,
            pot_value_cents=pot,
            carryovers=pushes,
            message=f"{wolf.first_name} is Wolf",
        )

    partner = player_lookup(players).get(current.partner_id) if current.partner_id else None
    if current.is_blind_wolf:
        message = "Blind Wolf!"
    elif partner is not None:
        message = f"Partnered with {partner.first_name}"
    else:
        message = "Lone Wolf!"
    return WolfHoleContext(
        wolf_id=wolf.id,
        wolf_name=wolf.first_name,
        partner_id=current.partner_id,
        partner_name=partner.first_name if partner else None,
        is_blind_wolf=current.is_blind_wolf,
        is_lone_wolf=current.partner_id is None,
        decision_made=True,
        pot_value_cents=pot,
        carryovers=pushes,
        message=message,
    )


def is_wolf_decision_pending(
    hole_number: int, decisions: Sequence[WolfDecision], has_scores: bool
) -> bool:
    """Scores are in for the hole but nobody recorded what the wolf did."""
    return has_scores and not any(d.hole_number == hole_number for d in decisions)


def calculate_wolf_settlements(
    results: Sequence[WolfHoleResult], players: Sequence[Player], stakes
) -> List[Settlement]:
    """Pair the biggest losers with the biggest winners until everyone is square."""
    standings = calculate_wolf_standings(results, players, stakes)
    winners = sorted(
        (s for s in standings if s.earnings_cents > 0), key=lambda s: -s.earnings_cents
    )
    losers = sorted(
        (s for s in standings if s.earnings_cents < 0), key=lambda s: s.earnings_cents
    )
    owed_to = {w.player_id: w.earnings_cents for w in winners}

    settlements: List[Settlement] = []
    for loser in losers:
        remaining = -loser.earnings_cents
        for winner in winners:
            if remaining <= 0:
                break
            payment = min(remaining, owed_to[winner.player_id])
            if payment <= 0:
                continue
            settlements.append(
                Settlement(
                    loser.player_id,
                    loser.player_name,
                    winner.player_id,
                    winner.player_name,
                    payment,
                    "Wolf",
                )
            )
            owed_to[winner.player_id] -= payment
            remaining -= payment
    return settlements
