import dataclasses
from decimal import Decimal
from fractions import Fraction
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .games.best_ball import TEAM_COLORS, Team
from .games.common import HoleInfo, Player, Score
from .games.configs import (
    BestBallConfig,
    MatchPlayConfig,
    NassauConfig,
    SkinsConfig,
    StablefordConfig,
    WolfConfig,
)
from .games.nassau import Press
from .games.wolf import DEFAULT_BLIND_MULTIPLIER, WolfDecision
from .money import cents_to_dollars, to_cents
from .services.rounds import RoundSnapshot
from .services.settlement import PropBet


def _coerce_stakes(value: Any) -> Decimal:
    """Bad stakes become 0 instead of failing the whole request."""
    return cents_to_dollars(to_cents(value))


def _strip(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValueError(f"{field_name} must not be empty")
    return trimmed


class PlayerIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=100)
    handicap: Optional[float] = None
    orderIndex: int = 0

    model_config = ConfigDict(extra="forbid")

    @field_validator("id", mode="before")
    @classmethod
    def _validate_id(cls, value: Any) -> str:
        return _strip(value, "id")

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, value: Any) -> str:
        return _strip(value, "name")

    def to_domain(self) -> Player:
        return Player(self.id, self.name, self.handicap, self.orderIndex)


class ScoreIn(BaseModel):
    playerId: str
    holeNumber: int = Field(..., ge=1)
    strokes: int = Field(..., ge=1, le=30)

    def to_domain(self) -> Score:
        return Score(self.playerId, self.holeNumber, self.strokes)


class HoleInfoIn(BaseModel):
    number: int = Field(..., ge=1)
    par: int = Field(default=4, ge=2, le=7)
    handicap: Optional[int] = Field(default=None, ge=1, le=18)
    distance: Optional[int] = Field(default=None, ge=0)

    def to_domain(self) -> HoleInfo:
        return HoleInfo(self.number, self.par, self.handicap, self.distance)


class PressIn(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    startHole: int = Field(..., ge=1)
    initiatedBy: str
    stakes: Decimal = Decimal("0")
    status: Literal["active", "won", "lost", "pushed"] = "active"

    @field_validator("stakes", mode="before")
    @classmethod
    def _validate_stakes(cls, value: Any) -> Decimal:
        return _coerce_stakes(value)

    def to_domain(self) -> Press:
        return Press(self.id, self.startHole, self.initiatedBy, to_cents(self.stakes), self.status)


class PropBetIn(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    type: Literal["ctp", "longest_drive", "custom"]
    holeNumber: int = Field(..., ge=1)
    stakes: Decimal = Decimal("0")
    winnerId: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=200)

    @field_validator("stakes", mode="before")
    @classmethod
    def _validate_stakes(cls, value: Any) -> Decimal:
        return _coerce_stakes(value)

    def to_domain(self) -> PropBet:
        return PropBet(
            self.id, self.type, self.holeNumber, self.stakes, self.winnerId, self.description
        )


class TeamIn(BaseModel):
    id: str
    name: str
    playerIds: List[str] = Field(..., min_length=1, max_length=2)
    color: Optional[str] = None

    def to_domain(self, index: int) -> Team:
        color = self.color or TEAM_COLORS[index % len(TEAM_COLORS)]
        return Team(self.id, self.name, tuple(self.playerIds), color)


class WolfDecisionIn(BaseModel):
    holeNumber: int = Field(..., ge=1)
    partnerId: Optional[str] = None
    blind: bool = False

    @model_validator(mode="after")
    def _blind_is_lone(self) -> "WolfDecisionIn":
        if self.blind and self.partnerId is not None:
            raise ValueError("a blind wolf cannot pick a partner")
        return self

    def to_domain(self) -> WolfDecision:
        return WolfDecision(self.holeNumber, self.partnerId, self.blind)


class _GameIn(BaseModel):
    id: Optional[str] = None
    stakes: Decimal = Decimal("0")
    useNet: bool = False

    model_config = ConfigDict(extra="forbid")

    @field_validator("stakes", mode="before")
    @classmethod
    def _validate_stakes(cls, value: Any) -> Decimal:
        return _coerce_stakes(value)


class SkinsGameIn(_GameIn):
    type: Literal["skins"]
    carryover: bool = True

    def to_domain(self) -> SkinsConfig:
        return SkinsConfig(self.id or self.type, self.stakes, self.useNet, self.carryover)


class NassauGameIn(_GameIn):
    type: Literal["nassau"]
    autoPress: bool = False

    def to_domain(self) -> NassauConfig:
        return NassauConfig(self.id or self.type, self.stakes, self.useNet, self.autoPress)


class MatchPlayGameIn(_GameIn):
    type: Literal["match"]

    def to_domain(self) -> MatchPlayConfig:
        return MatchPlayConfig(self.id or self.type, self.stakes, self.useNet)


class StablefordGameIn(_GameIn):
    type: Literal["stableford"]
    modified: bool = False

    def to_domain(self) -> StablefordConfig:
        return StablefordConfig(self.id or self.type, self.stakes, self.useNet, self.modified)


class BestBallGameIn(_GameIn):
    type: Literal["bestball"]
    teams: List[TeamIn] = Field(default_factory=list)

    def to_domain(self) -> BestBallConfig:
        teams = tuple(team.to_domain(i) for i, team in enumerate(self.teams))
        return BestBallConfig(self.id or self.type, self.stakes, self.useNet, teams)


class WolfGameIn(_GameIn):
    type: Literal["wolf"]
    carryover: bool = True
    blindWolfMultiplier: int = Field(default=DEFAULT_BLIND_MULTIPLIER, ge=1, le=10)
    decisions: List[WolfDecisionIn] = Field(default_factory=list)

    def to_domain(self) -> WolfConfig:
        return WolfConfig(
            self.id or self.type,
            self.stakes,
            self.useNet,
            self.carryover,
            self.blindWolfMultiplier,
            tuple(d.to_domain() for d in self.decisions),
        )


GameIn = Annotated[
    Union[
        SkinsGameIn,
        NassauGameIn,
        MatchPlayGameIn,
        StablefordGameIn,
        BestBallGameIn,
        WolfGameIn,
    ],
    Field(discriminator="type"),
]


class RoundSnapshotIn(BaseModel):
    players: List[PlayerIn] = Field(..., min_length=1)
    scores: List[ScoreIn] = Field(default_factory=list)
    holeInfo: List[HoleInfoIn] = Field(default_factory=list)
    games: List[GameIn] = Field(default_factory=list)
    presses: List[PressIn] = Field(default_factory=list)
    propBets: List[PropBetIn] = Field(default_factory=list)
    strokesPerHole: Dict[str, Dict[int, int]] = Field(default_factory=dict)
    holesInRound: int = 18

    model_config = ConfigDict(extra="forbid")

    def to_domain(self) -> RoundSnapshot:
        return RoundSnapshot(
            players=tuple(p.to_domain() for p in self.players),
            scores=tuple(s.to_domain() for s in self.scores),
            hole_info=tuple(h.to_domain() for h in self.holeInfo),
            games=tuple(g.to_domain() for g in self.games),
            presses=tuple(p.to_domain() for p in self.presses),
            prop_bets=tuple(b.to_domain() for b in self.propBets),
            strokes_per_hole={pid: dict(holes) for pid, holes in self.strokesPerHole.items()},
            holes_in_round=self.holesInRound,
        )


class PressCheckIn(BaseModel):
    round: RoundSnapshotIn
    playerId: str
    currentHole: int = Field(..., ge=1)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_jsonable(value: Any) -> Any:
    """Turn engine dataclasses into camelCase JSON.

    ``*_cents`` fields are reported in dollars under the name without the
    suffix, and exact fractions become floats.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out: Dict[str, Any] = {}
        for f in dataclasses.fields(value):
            raw = getattr(value, f.name)
            if f.name.endswith("_cents"):
                out[_camel(f.name[: -len("_cents")])] = float(cents_to_dollars(raw))
            else:
                out[_camel(f.name)] = to_jsonable(raw)
        return out
    if isinstance(value, (Fraction, Decimal)):
        return float(value)
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


class GameTypeOut(BaseModel):
    id: str
    name: str
    minPlayers: int
    maxPlayers: int
    description: str


class GameResultOut(BaseModel):
    id: str
    type: str
    result: Dict[str, Any]


class SettlementOut(BaseModel):
    fromPlayerId: str
    fromPlayerName: str
    toPlayerId: str
    toPlayerName: str
    amount: float
    text: str


class RoundResultsOut(BaseModel):
    games: List[GameResultOut]
    settlements: List[SettlementOut]


class MoneyBreakdownOut(BaseModel):
    skins: float = 0
    nassau: float = 0
    match: float = 0
    wolf: float = 0
    propBets: float = 0
    total: float = 0


class PlayerMoneyOut(BaseModel):
    playerId: str
    playerName: str
    currentBalance: float
    previousBalance: float
    change: float
    display: str


class BiggestSwingOut(BaseModel):
    playerId: str
    playerName: str
    amount: float
    holeNumber: int


class LiveMoneyOut(BaseModel):
    holeNumber: int
    players: List[PlayerMoneyOut]
    biggestSwing: Optional[BiggestSwingOut] = None
    breakdown: Dict[str, MoneyBreakdownOut]
    settlements: List[SettlementOut]


class PressOut(BaseModel):
    id: str
    startHole: int
    initiatedBy: str
    stakes: float
    status: str


class PressCheckOut(BaseModel):
    canPress: bool
    playerStanding: int
    segment: str
    autoPress: Optional[PressOut] = None
