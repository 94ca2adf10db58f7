"""Game configurations, one frozen dataclass per game type.

``GameConfig`` is a closed union. Code that branches on it must handle
every member and raise ``TypeError`` for anything else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

from .best_ball import Team
from .wolf import DEFAULT_BLIND_MULTIPLIER, WolfDecision


@dataclass(frozen=True)
class SkinsConfig:
    id: str = "skins"
    stakes: float = 0.0
    use_net: bool = False
    carryover: bool = True

    type = "skins"


@dataclass(frozen=True)
class NassauConfig:
    id: str = "nassau"
    stakes: float = 0.0
    use_net: bool = False
    auto_press: bool = False

    type = "nassau"


@dataclass(frozen=True)
class MatchPlayConfig:
    id: str = "match"
    stakes: float = 0.0
    use_net: bool = False

    type = "match"


@dataclass(frozen=True)
class StablefordConfig:
    id: str = "stableford"
    stakes: float = 0.0
    use_net: bool = False
    modified: bool = False

    type = "stableford"


@dataclass(frozen=True)
class BestBallConfig:
    id: str = "bestball"
    stakes: float = 0.0
    use_net: bool = False
    teams: Tuple[Team, ...] = field(default_factory=tuple)

    type = "bestball"


@dataclass(frozen=True)
class WolfConfig:
    id: str = "wolf"
    stakes: float = 0.0
    use_net: bool = False
    carryover: bool = True
    blind_wolf_multiplier: int = DEFAULT_BLIND_MULTIPLIER
    decisions: Tuple[WolfDecision, ...] = field(default_factory=tuple)

    type = "wolf"


GameConfig = Union[
    SkinsConfig,
    NassauConfig,
    MatchPlayConfig,
    StablefordConfig,
    BestBallConfig,
    WolfConfig,
]

GAME_CONFIG_TYPES = (
    SkinsConfig,
    NassauConfig,
    MatchPlayConfig,
    StablefordConfig,
    BestBallConfig,
    WolfConfig,
)
