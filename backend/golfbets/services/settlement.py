"""Cross-game settlement: one pairwise ledger, netted to the fewest payments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..games.common import Player, Settlement
from ..games.nassau import NassauResult
from ..games.skins import SkinsResult
from ..games.wolf import WOLF_PLAYERS, WolfResult
from ..money import cents_to_dollars, split_proportionally, to_cents

logger = logging.getLogger(__name__)

PROP_BET_TYPES = ("ctp", "longest_drive", "custom")
PROP_BET_LABELS = {
    "ctp": "Closest to Pin",
    "longest_drive": "Longest Drive",
    "custom": "Custom Bet",
}


@dataclass(frozen=True)
class PropBet:
    id: str
    type: str
    hole_number: int
    stakes: float
    winner_id: Optional[str] = None
    description: Optional[str] = None

    @property
    def label(self) -> str:
        return PROP_BET_LABELS.get(self.type, "Custom Bet")


@dataclass(frozen=True)
class NetSettlement:
    from_player_id: str
    from_player_name: str
    to_player_id: str
    to_player_name: str
    amount_cents: int

    @property
    def amount(self) -> Decimal:
        return cents_to_dollars(self.amount_cents)


Ledger = Dict[str, Dict[str, int]]


def _empty_ledger(players: Sequence[Player]) -> Ledger:
    return {a.id: {b.id: 0 for b in players if b.id != a.id} for a in players}


def _charge(ledger: Ledger, debtor: str, creditor: str, cents: int) -> None:
    if cents <= 0 or debtor == creditor:
        return
    if debtor not in ledger or creditor not in ledger[debtor]:
        logger.debug("Dropping transfer between unknown players %s -> %s", debtor, creditor)
        return
    ledger[debtor][creditor] += cents


def _distribute_pool(
    ledger: Ledger, players: Sequence[Player], earnings: Dict[str, int]
) -> None:
    """Losers pay winners so every winner collects exactly their earnings.

    ``earnings`` must sum to zero. Each loser splits their deficit across the
    winners in proportion to what each winner is still owed; the last loser
    pays whatever remains.
    """
    owed: Dict[str, int] = {
        p.id: earnings[p.id] for p in players if earnings.get(p.id, 0) > 0
    }
    losers: List[Tuple[str, int]] = [
        (p.id, -earnings[p.id]) for p in players if earnings.get(p.id, 0) < 0
    ]
    for index, (loser_id, deficit) in enumerate(losers):
        if index == len(losers) - 1 and deficit == sum(owed.values()):
            shares = dict(owed)
        else:
            shares = split_proportionally(deficit, list(owed.items()))
        for winner_id, cents in shares.items():
            # a proportional share never exceeds what the winner is still owed
            owed[winner_id] -= cents
            _charge(ledger, loser_id, winner_id, cents)


def _add_settlements(ledger: Ledger, settlements: Iterable[Settlement]) -> None:
    for s in settlements:
        _charge(ledger, s.from_player_id, s.to_player_id, s.amount_cents)


def _add_prop_bets(ledger: Ledger, players: Sequence[Player], prop_bets: Iterable[PropBet]) -> None:
    ids = {p.id for p in players}
    for bet in prop_bets:
        if not bet.winner_id or bet.winner_id not in ids:
            continue
        stakes = to_cents(bet.stakes)
        for p in players:
            if p.id != bet.winner_id:
                _charge(ledger, p.id, bet.winner_id, stakes)


def build_ledger(
    players: Sequence[Player],
    skins_result: Optional[SkinsResult] = None,
    nassau_result: Optional[NassauResult] = None,
    match_play_winner_id: Optional[str] = None,
    match_play_stakes=None,
    wolf_result: Optional[WolfResult] = None,
    prop_bets: Sequence[PropBet] = (),
) -> Ledger:
    """``ledger[a][b]`` is the gross amount in cents ``a`` owes ``b``."""
    ledger = _empty_ledger(players)

    if skins_result is not None:
        _distribute_pool(
            ledger, players, {s.player_id: s.earnings_cents for s in skins_result.standings}
        )

    if nassau_result is not None:
        _add_settlements(ledger, nassau_result.settlements)

    stakes = to_cents(match_play_stakes)
    if match_play_winner_id and stakes and len(players) == 2:
        loser = next((p for p in players if p.id != match_play_winner_id), None)
        if loser is not None:
            _charge(ledger, loser.id, match_play_winner_id, stakes)

    if wolf_result is not None and wolf_result.results and len(players) == WOLF_PLAYERS:
        _distribute_pool(
            ledger, players, {s.player_id: s.earnings_cents for s in wolf_result.standings}
        )

    _add_prop_bets(ledger, players, prop_bets)
    return ledger


def net_ledger(ledger: Ledger, players: Sequence[Player]) -> List[NetSettlement]:
    """Collapse both directions of every pair into at most one payment."""
    settlements: List[NetSettlement] = []
    for i, a in enumerate(players):
        for b in players[i + 1:]:
            net = ledger[a.id][b.id] - ledger[b.id][a.id]
            if net == 0:
                continue
            payer, payee = (a, b) if net > 0 else (b, a)
            settlements.append(
                NetSettlement(payer.id, payer.name, payee.id, payee.name, abs(net))
            )
    settlements.sort(key=lambda s: -s.amount_cents)
    return settlements


def calculate_settlement(
    players: Sequence[Player],
    skins_result: Optional[SkinsResult] = None,
    nassau_result: Optional[NassauResult] = None,
    match_play_winner_id: Optional[str] = None,
    match_play_stakes=None,
    wolf_result: Optional[WolfResult] = None,
    prop_bets: Sequence[PropBet] = (),
) -> List[NetSettlement]:
    ledger = build_ledger(
        players,
        skins_result,
        nassau_result,
        match_play_winner_id,
        match_play_stakes,
        wolf_result,
        prop_bets,
    )
    settlements = net_ledger(ledger, players)
    logger.debug("Netted %d settlement(s) for %d player(s)", len(settlements), len(players))
    return settlements


def format_settlement_text(settlement: NetSettlement) -> str:
    dollars = settlement.amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{settlement.from_player_name} owes {settlement.to_player_name} ${dollars}"


def get_total_winnings(player_id: str, settlements: Iterable[NetSettlement]) -> int:
    """Signed cents ``player_id`` collects (negative when paying)."""
    total = 0
    for s in settlements:
        if s.to_player_id == player_id:
            total += s.amount_cents
        elif s.from_player_id == player_id:
            total -= s.amount_cents
    return total
