import logging

from fastapi import APIRouter, Query

from ..exceptions import HoleOutOfRange, InvalidRoundSnapshot
from ..games.configs import NassauConfig
from ..games.nassau import Press, calculate_nassau, can_press, check_auto_press
from ..money import cents_to_dollars
from ..schemas import (
    BiggestSwingOut,
    GameResultOut,
    LiveMoneyOut,
    MoneyBreakdownOut,
    PlayerMoneyOut,
    PressCheckIn,
    PressCheckOut,
    PressOut,
    RoundResultsOut,
    RoundSnapshotIn,
    SettlementOut,
    to_jsonable,
)
from ..services.live_money import calculate_live_money, format_money
from ..services.rounds import RoundSnapshot, compute_round
from ..services.settlement import NetSettlement, format_settlement_text
from ..services.validation import ValidationError, validate_round_snapshot

logger = logging.getLogger(__name__)

# Resource-only prefix; no /api or /api/v0 here
router = APIRouter(prefix="/rounds", tags=["rounds"])


def _dollars(cents: int) -> float:
    return float(cents_to_dollars(cents))


def _load(body: RoundSnapshotIn) -> RoundSnapshot:
    snapshot = body.to_domain()
    try:
        validate_round_snapshot(snapshot)
    except ValidationError as exc:
        raise InvalidRoundSnapshot(exc.detail)
    return snapshot


def _check_hole(hole: int, snapshot: RoundSnapshot) -> None:
    if hole > snapshot.holes_in_round:
        raise HoleOutOfRange(hole, snapshot.holes_in_round)


def _settlement_out(settlement: NetSettlement) -> SettlementOut:
    return SettlementOut(
        fromPlayerId=settlement.from_player_id,
        fromPlayerName=settlement.from_player_name,
        toPlayerId=settlement.to_player_id,
        toPlayerName=settlement.to_player_name,
        amount=float(settlement.amount),
        text=format_settlement_text(settlement),
    )


def _press_out(press: Press) -> PressOut:
    return PressOut(
        id=press.id,
        startHole=press.start_hole,
        initiatedBy=press.initiated_by,
        stakes=_dollars(press.stakes_cents),
        status=press.status,
    )


# POST /api/v0/rounds/results
@router.post("/results", response_model=RoundResultsOut)
def round_results(body: RoundSnapshotIn) -> RoundResultsOut:
    snapshot = _load(body)
    computed = compute_round(snapshot)
    games = [
        GameResultOut(id=game.id, type=game.type, result=to_jsonable(computed.results[game.id]))
        for game in snapshot.games
    ]
    return RoundResultsOut(
        games=games,
        settlements=[_settlement_out(s) for s in computed.settlements],
    )


# POST /api/v0/rounds/settlement
@router.post("/settlement", response_model=list[SettlementOut])
def round_settlement(body: RoundSnapshotIn) -> list[SettlementOut]:
    snapshot = _load(body)
    return [_settlement_out(s) for s in compute_round(snapshot).settlements]


# POST /api/v0/rounds/live-money?hole=7
@router.post("/live-money", response_model=LiveMoneyOut)
def live_money(
    body: RoundSnapshotIn,
    hole: int = Query(..., ge=1, description="Last hole to include"),
) -> LiveMoneyOut:
    snapshot = _load(body)
    _check_hole(hole, snapshot)
    state = calculate_live_money(snapshot, hole)

    swing = state.biggest_swing
    return LiveMoneyOut(
        holeNumber=state.hole_number,
        players=[
            PlayerMoneyOut(
                playerId=m.player_id,
                playerName=m.player_name,
                currentBalance=_dollars(m.current_balance_cents),
                previousBalance=_dollars(m.previous_balance_cents),
                change=_dollars(m.change_cents),
                display=format_money(m.current_balance_cents),
            )
            for m in state.players
        ],
        biggestSwing=BiggestSwingOut(
            playerId=swing.player_id,
            playerName=swing.player_name,
            amount=_dollars(swing.amount_cents),
            holeNumber=swing.hole_number,
        )
        if swing
        else None,
        breakdown={
            pid: MoneyBreakdownOut(
                skins=_dollars(b.skins),
                nassau=_dollars(b.nassau),
                match=_dollars(b.match),
                wolf=_dollars(b.wolf),
                propBets=_dollars(b.prop_bets),
                total=_dollars(b.total),
            )
            for pid, b in state.breakdown.items()
        },
        settlements=[_settlement_out(s) for s in state.settlements],
    )


# POST /api/v0/rounds/presses/check
@router.post("/presses/check", response_model=PressCheckOut)
def check_press(body: PressCheckIn) -> PressCheckOut:
    snapshot = _load(body.round)
    _check_hole(body.currentHole, snapshot)
    if body.playerId not in {p.id for p in snapshot.players}:
        raise InvalidRoundSnapshot(f"player '{body.playerId}' is not in this round")
    nassau = next((g for g in snapshot.games if isinstance(g, NassauConfig)), None)
    if nassau is None:
        raise InvalidRoundSnapshot("round has no nassau game")

    strokes = snapshot.strokes_per_hole if nassau.use_net else None
    presses = snapshot.presses
    result = calculate_nassau(
        snapshot.scores, snapshot.players, nassau.stakes, presses, snapshot.holes_in_round, strokes
    )
    on_front = body.currentHole <= result.front9.last_hole
    segment = result.front9 if on_front else result.back9
    standing = segment.standing(body.playerId)

    suggested = None
    if nassau.auto_press:
        suggested = check_auto_press(
            snapshot.scores,
            snapshot.players,
            nassau.stakes,
            presses,
            snapshot.holes_in_round,
            strokes,
        )
    allowed = can_press(body.currentHole, standing, presses, snapshot.holes_in_round)
    logger.debug(
        "Press check for %s on hole %d: standing %d, allowed %s",
        body.playerId,
        body.currentHole,
        standing,
        allowed,
    )
    return PressCheckOut(
        canPress=allowed,
        playerStanding=standing,
        segment="Front 9" if on_front else "Back 9",
        autoPress=_press_out(suggested) if suggested else None,
    )
