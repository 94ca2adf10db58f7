"""Run every configured game against one snapshot of a round."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..games.best_ball import BestBallMatchResult, calculate_best_ball_match, create_default_teams
from ..games.common import HoleInfo, Player, Score, StrokesPerHole
from ..games.configs import (
    BestBallConfig,
    GameConfig,
    MatchPlayConfig,
    NassauConfig,
    SkinsConfig,
    StablefordConfig,
    WolfConfig,
)
from ..games.match_play import MatchPlayResult, calculate_match_play
from ..games.nassau import NassauResult, Press, calculate_nassau, check_auto_press
from ..games.skins import SkinsResult, calculate_skins
from ..games.stableford import StablefordResult, calculate_stableford
from ..games.wolf import WolfResult, calculate_wolf
from .settlement import NetSettlement, PropBet, calculate_settlement

logger = logging.getLogger(__name__)

GameResult = Union[
    SkinsResult,
    NassauResult,
    MatchPlayResult,
    StablefordResult,
    BestBallMatchResult,
    WolfResult,
]


@dataclass(frozen=True)
class RoundSnapshot:
    """Everything the engine knows about a round at one instant."""

    players: Tuple[Player, ...]
    scores: Tuple[Score, ...] = ()
    hole_info: Tuple[HoleInfo, ...] = ()
    games: Tuple[GameConfig, ...] = ()
    presses: Tuple[Press, ...] = ()
    prop_bets: Tuple[PropBet, ...] = ()
    strokes_per_hole: Mapping[str, Mapping[int, int]] = field(default_factory=dict)
    holes_in_round: int = 18

    def truncated(self, up_to_hole: int) -> "RoundSnapshot":
        """The same round as it stood once ``up_to_hole`` was finished."""
        games = tuple(
            dataclasses.replace(
                g, decisions=tuple(d for d in g.decisions if d.hole_number <= up_to_hole)
            )
            if isinstance(g, WolfConfig)
            else g
            for g in self.games
        )
        return dataclasses.replace(
            self,
            scores=tuple(s for s in self.scores if s.hole_number <= up_to_hole),
            games=games,
            presses=tuple(p for p in self.presses if p.start_hole <= up_to_hole),
            prop_bets=tuple(b for b in self.prop_bets if b.hole_number <= up_to_hole),
        )


@dataclass(frozen=True)
class RoundResults:
    results: Dict[str, GameResult]
    settlements: List[NetSettlement]


def _strokes(snapshot: RoundSnapshot, config: GameConfig) -> Optional[StrokesPerHole]:
    return snapshot.strokes_per_hole if config.use_net else None


def replay_auto_presses(snapshot: RoundSnapshot, config: NassauConfig) -> Tuple[Press, ...]:
    """Rebuild the presses an auto-press nassau would have opened so far.

    Presses are replayed hole by hole from the snapshot, so their ids are
    derived from the start hole rather than random and recomputing gives the
    same result every time.
    """
    presses: List[Press] = list(snapshot.presses)
    strokes = _strokes(snapshot, config)
    for hole in range(1, snapshot.holes_in_round + 1):
        scores = [s for s in snapshot.scores if s.hole_number <= hole]
        press = check_auto_press(
            scores, snapshot.players, config.stakes, presses, snapshot.holes_in_round, strokes
        )
        if press is not None and press.start_hole == hole + 1:
            presses.append(dataclasses.replace(press, id=f"auto-{press.start_hole}"))
    return tuple(presses)


def compute_game(snapshot: RoundSnapshot, config: GameConfig) -> GameResult:
    players = snapshot.players
    scores = snapshot.scores
    strokes = _strokes(snapshot, config)

    if isinstance(config, SkinsConfig):
        return calculate_skins(
            scores, players, snapshot.holes_in_round, config.stakes, config.carryover, strokes
        )
    if isinstance(config, NassauConfig):
        presses = replay_auto_presses(snapshot, config) if config.auto_press else snapshot.presses
        return calculate_nassau(
            scores, players, config.stakes, presses, snapshot.holes_in_round, strokes
        )
    if isinstance(config, MatchPlayConfig):
        return calculate_match_play(
            scores, players, snapshot.hole_info, strokes, snapshot.holes_in_round
        )
    if isinstance(config, StablefordConfig):
        return calculate_stableford(scores, players, snapshot.hole_info, config.modified, strokes)
    if isinstance(config, BestBallConfig):
        teams = config.teams or tuple(create_default_teams(players))
        return calculate_best_ball_match(
            scores, players, teams, snapshot.hole_info, snapshot.holes_in_round, strokes
        )
    if isinstance(config, WolfConfig):
        return calculate_wolf(
            scores,
            players,
            config.decisions,
            config.stakes,
            config.carryover,
            strokes,
            config.blind_wolf_multiplier,
            snapshot.holes_in_round,
        )
    raise TypeError(f"unsupported game config: {config!r}")


def _first(results: Sequence[Tuple[GameConfig, GameResult]], kind: type):
    return next(((c, r) for c, r in results if isinstance(c, kind)), (None, None))


def compute_round(snapshot: RoundSnapshot) -> RoundResults:
    """All game results for the snapshot plus the netted settlement."""
    computed = [(config, compute_game(snapshot, config)) for config in snapshot.games]
    logger.debug(
        "Computed %d game(s) for %d player(s)", len(computed), len(snapshot.players)
    )

    _, skins = _first(computed, SkinsConfig)
    _, nassau = _first(computed, NassauConfig)
    _, wolf = _first(computed, WolfConfig)
    match_config, match = _first(computed, MatchPlayConfig)

    settlements = calculate_settlement(
        snapshot.players,
        skins_result=skins,
        nassau_result=nassau,
        match_play_winner_id=match.winner_id if match else None,
        match_play_stakes=match_config.stakes if match_config else None,
        wolf_result=wolf,
        prop_bets=snapshot.prop_bets,
    )
    return RoundResults(
        results={config.id: result for config, result in computed},
        settlements=settlements,
    )
