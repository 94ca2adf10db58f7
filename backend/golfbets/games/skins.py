"""Skins: lowest score on a hole takes the pot, ties carry over."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..money import cents_to_dollars, to_cents
from .common import Player, Score, ScoreBook, StrokesPerHole


@dataclass(frozen=True)
class SkinHoleResult:
    hole_number: int
    winner_id: Optional[str]  # None = pushed
    value: int  # skins this hole paid out


@dataclass(frozen=True)
class SkinsStanding:
    player_id: str
    player_name: str
    skins: int
    earnings_cents: int

    @property
    def earnings(self):
        return cents_to_dollars(self.earnings_cents)


@dataclass(frozen=True)
class SkinsResult:
    results: List[SkinHoleResult] = field(default_factory=list)
    standings: List[SkinsStanding] = field(default_factory=list)
    carryover: int = 0
    holes_played: int = 0
    skins_awarded: int = 0
    skins_lost: int = 0
    pot_per_skin_cents: int = 0
    total_pot_cents: int = 0


def _hole_winner(
    book: ScoreBook, hole: int, strokes_per_hole: Optional[StrokesPerHole]
) -> Optional[str]:
    nets = book.net_scores(hole, strokes_per_hole)
    lowest = min(nets.values())
    winners = [pid for pid, net in nets.items() if net == lowest]
    return winners[0] if len(winners) == 1 else None


def calculate_skins(
    scores: Sequence[Score],
    players: Sequence[Player],
    holes_played: int,
    stakes_per_skin,
    carryover: bool = True,
    strokes_per_hole: Optional[StrokesPerHole] = None,
) -> SkinsResult:
    """Play skins over holes ``1..holes_played``.

    Only holes every player has scored are counted. Each player antes
    ``stakes_per_skin`` for every skin that is actually claimed, so a skin
    still riding on carryover (or lost to a tie with carryover disabled)
    costs nobody anything and earnings always sum to zero.
    """
    stakes = to_cents(stakes_per_skin)
    book = ScoreBook(scores, players)
    results: List[SkinHoleResult] = []
    skins_won: Dict[str, int] = {p.id: 0 for p in players}
    current_carryover = 0
    completed = 0
    lost = 0

    for hole in range(1, holes_played + 1):
        if not book.is_complete(hole):
            continue
        completed += 1
        winner_id = _hole_winner(book, hole, strokes_per_hole)
        if winner_id is not None:
            value = 1 + current_carryover
            results.append(SkinHoleResult(hole, winner_id, value))
            skins_won[winner_id] += value
            current_carryover = 0
        else:
            results.append(SkinHoleResult(hole, None, 0))
            if carryover:
                current_carryover += 1
            else:
                lost += 1

    awarded = sum(skins_won.values())
    pot_per_skin = stakes * len(players)
    contribution = awarded * stakes
    standings = [
        SkinsStanding(
            player_id=p.id,
            player_name=p.name,
            skins=skins_won[p.id],
            earnings_cents=skins_won[p.id] * pot_per_skin - contribution,
        )
        for p in players
    ]
    standings.sort(key=lambda s: -s.skins)

    return SkinsResult(
        results=results,
        standings=standings,
        carryover=current_carryover,
        holes_played=completed,
        skins_awarded=awarded,
        skins_lost=lost,
        pot_per_skin_cents=pot_per_skin,
        total_pot_cents=completed * pot_per_skin,
    )


@dataclass(frozen=True)
class SkinsHoleSummary:
    winner_id: Optional[str]
    winner_name: Optional[str]
    value: int
    is_carryover: bool


def get_skins_hole_result(
    results: Sequence[SkinHoleResult], hole_number: int, players: Sequence[Player]
) -> SkinsHoleSummary:
    result = next((r for r in results if r.hole_number == hole_number), None)
    if result is None:
        return SkinsHoleSummary(None, None, 0, False)
    if result.winner_id:
        winner = next((p for p in players if p.id == result.winner_id), None)
        return SkinsHoleSummary(
            result.winner_id, winner.name if winner else "Unknown", result.value, False
        )
    return SkinsHoleSummary(None, None, 0, True)


@dataclass(frozen=True)
class SkinsHoleContext:
    pot_value_cents: int
    carryovers: int
    message: str


def get_skins_hole_context(
    scores: Sequence[Score],
    players: Sequence[Player],
    current_hole: int,
    stakes_per_skin,
    carryover: bool = True,
    strokes_per_hole: Optional[StrokesPerHole] = None,
) -> SkinsHoleContext:
    """What is riding on ``current_hole`` given the holes before it."""
    result = calculate_skins(
        scores, players, current_hole - 1, stakes_per_skin, carryover, strokes_per_hole
    )
    base = to_cents(stakes_per_skin) * len(players)
    carried = result.carryover
    pot = base * (1 + carried)
    if carried:
        suffix = "s" if carried > 1 else ""
        message = f"${cents_to_dollars(pot)} ({carried} carryover{suffix})"
    else:
        message = f"${cents_to_dollars(base)}"
    return SkinsHoleContext(pot_value_cents=pot, carryovers=carried, message=message)
