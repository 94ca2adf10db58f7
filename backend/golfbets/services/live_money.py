"""Running money position per player as a round is played."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Mapping, Optional, Sequence

from ..games.common import Player
from ..games.configs import (
    BestBallConfig,
    GameConfig,
    MatchPlayConfig,
    NassauConfig,
    SkinsConfig,
    StablefordConfig,
    WolfConfig,
)
from ..games.wolf import WOLF_PLAYERS
from ..money import cents_to_dollars, to_cents
from .rounds import GameResult, RoundSnapshot, compute_game, compute_round
from .settlement import NetSettlement, PropBet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoneyBreakdown:
    skins: int = 0
    nassau: int = 0
    match: int = 0
    wolf: int = 0
    prop_bets: int = 0

    @property
    def total(self) -> int:
        return self.skins + self.nassau + self.match + self.wolf + self.prop_bets


@dataclass(frozen=True)
class PlayerMoney:
    player_id: str
    player_name: str
    current_balance_cents: int
    previous_balance_cents: int

    @property
    def change_cents(self) -> int:
        return self.current_balance_cents - self.previous_balance_cents


@dataclass(frozen=True)
class BiggestSwing:
    player_id: str
    player_name: str
    amount_cents: int
    hole_number: int


@dataclass(frozen=True)
class LiveMoneyState:
    hole_number: int
    players: List[PlayerMoney]
    biggest_swing: Optional[BiggestSwing]
    breakdown: Dict[str, MoneyBreakdown]
    settlements: List[NetSettlement]


def _game_balances(
    config: GameConfig, result: GameResult, players: Sequence[Player]
) -> Dict[str, int]:
    """Signed cents each player is up or down in one game."""
    balances = {p.id: 0 for p in players}

    if isinstance(config, SkinsConfig):
        for standing in result.standings:
            balances[standing.player_id] += standing.earnings_cents
        return balances
    if isinstance(config, NassauConfig):
        for s in result.settlements:
            balances[s.from_player_id] -= s.amount_cents
            balances[s.to_player_id] += s.amount_cents
        return balances
    if isinstance(config, MatchPlayConfig):
        stakes = to_cents(config.stakes)
        if result.winner_id and stakes and len(players) == 2:
            for p in players:
                balances[p.id] += stakes if p.id == result.winner_id else -stakes
        return balances
    if isinstance(config, WolfConfig):
        if result.results and len(players) == WOLF_PLAYERS:
            for standing in result.standings:
                balances[standing.player_id] += standing.earnings_cents
        return balances
    if isinstance(config, (StablefordConfig, BestBallConfig)):
        # points games, no money changes hands
        return balances
    raise TypeError(f"unsupported game config: {config!r}")


def _prop_bet_balances(
    prop_bets: Sequence[PropBet], players: Sequence[Player]
) -> Dict[str, int]:
    balances = {p.id: 0 for p in players}
    for bet in prop_bets:
        if not bet.winner_id or bet.winner_id not in balances:
            continue
        stakes = to_cents(bet.stakes)
        for p in players:
            if p.id != bet.winner_id:
                balances[p.id] -= stakes
                balances[bet.winner_id] += stakes
    return balances


def calculate_breakdown(snapshot: RoundSnapshot) -> Dict[str, MoneyBreakdown]:
    """Per-player money split by game type for the whole snapshot."""
    players = snapshot.players
    parts: Dict[str, Dict[str, int]] = {
        p.id: {"skins": 0, "nassau": 0, "match": 0, "wolf": 0} for p in players
    }
    seen = set()
    for config in snapshot.games:
        if config.type in seen:
            logger.warning("Skipping duplicate %s game %r", config.type, config.id)
            continue
        seen.add(config.type)
        if isinstance(config, (StablefordConfig, BestBallConfig)):
            continue
        result = compute_game(snapshot, config)
        for pid, cents in _game_balances(config, result, players).items():
            parts[pid][config.type] += cents

    props = _prop_bet_balances(snapshot.prop_bets, players)
    return {
        p.id: MoneyBreakdown(prop_bets=props[p.id], **parts[p.id]) for p in players
    }


def calculate_live_money(
    snapshot: RoundSnapshot,
    up_to_hole: int,
    previous_money: Optional[Mapping[str, int]] = None,
) -> LiveMoneyState:
    """Money standings once ``up_to_hole`` has been played.

    ``previous_money`` holds each player's balance in cents before this hole.
    When omitted it is recomputed from the same snapshot one hole earlier.
    """
    current = snapshot.truncated(up_to_hole)
    breakdown = calculate_breakdown(current)

    if previous_money is None:
        if up_to_hole > 1:
            before = calculate_breakdown(snapshot.truncated(up_to_hole - 1))
            previous_money = {pid: b.total for pid, b in before.items()}
        else:
            previous_money = {}

    players = [
        PlayerMoney(
            player_id=p.id,
            player_name=p.name,
            current_balance_cents=breakdown[p.id].total,
            previous_balance_cents=int(previous_money.get(p.id, 0)),
        )
        for p in snapshot.players
    ]

    swing: Optional[BiggestSwing] = None
    for money in players:
        change = abs(money.change_cents)
        if change and (swing is None or change > abs(swing.amount_cents)):
            swing = BiggestSwing(money.player_id, money.player_name, money.change_cents, up_to_hole)

    players.sort(key=lambda m: -m.current_balance_cents)
    return LiveMoneyState(
        hole_number=up_to_hole,
        players=players,
        biggest_swing=swing,
        breakdown=breakdown,
        settlements=compute_round(current).settlements,
    )


def format_money(cents: int) -> str:
    """Signed whole dollars, e.g. ``+$12`` or ``-$3``. Zero reads ``+$0``."""
    dollars = cents_to_dollars(abs(cents)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if cents < 0 else "+"
    return f"{sign}${dollars}"
