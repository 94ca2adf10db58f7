from fastapi import APIRouter

from ..games.wolf import WOLF_PLAYERS
from ..schemas import GameTypeOut
from ..services.validation import MAX_PLAYERS

# Resource-only prefix; no /api or /api/v0 here
router = APIRouter(prefix="/games", tags=["games"])


GAME_CATALOG: tuple[GameTypeOut, ...] = (
    GameTypeOut(
        id="skins",
        name="Skins",
        minPlayers=2,
        maxPlayers=MAX_PLAYERS,
        description="Lowest score on a hole wins the skin; ties carry over.",
    ),
    GameTypeOut(
        id="nassau",
        name="Nassau",
        minPlayers=2,
        maxPlayers=2,
        description="Front nine, back nine and overall bets, with presses.",
    ),
    GameTypeOut(
        id="match",
        name="Match Play",
        minPlayers=2,
        maxPlayers=2,
        description="Hole-by-hole match, won when the lead exceeds the holes left.",
    ),
    GameTypeOut(
        id="stableford",
        name="Stableford",
        minPlayers=1,
        maxPlayers=MAX_PLAYERS,
        description="Points per hole relative to par; most points wins.",
    ),
    GameTypeOut(
        id="bestball",
        name="Best Ball",
        minPlayers=2,
        maxPlayers=MAX_PLAYERS,
        description="Each team counts its lowest score on every hole.",
    ),
    GameTypeOut(
        id="wolf",
        name="Wolf",
        minPlayers=WOLF_PLAYERS,
        maxPlayers=WOLF_PLAYERS,
        description="Rotating wolf picks a partner or plays alone against the rest.",
    ),
)


# GET /api/v0/games
@router.get("", response_model=list[GameTypeOut])
def list_games() -> list[GameTypeOut]:
    return list(GAME_CATALOG)
