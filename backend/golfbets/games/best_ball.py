"""Best ball: each team counts its lowest score on every hole."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .common import (
    HoleInfo,
    Player,
    Score,
    ScoreBook,
    StrokesPerHole,
    classify_urgency,
    net_score,
    par_for,
    player_lookup,
)

TEAM_COLORS = ("#22c55e", "#3b82f6", "#f97316", "#a855f7")


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    player_ids: Tuple[str, ...]
    color: str = TEAM_COLORS[0]


@dataclass(frozen=True)
class TeamHoleScore:
    team_id: str
    best_score: int
    contributor_id: str


@dataclass(frozen=True)
class BestBallHoleResult:
    hole_number: int
    team_scores: List[TeamHoleScore]
    winning_team_id: Optional[str]


@dataclass(frozen=True)
class TeamHole:
    hole: int
    best_score: int
    contributor_id: str
    contributor_name: str


@dataclass(frozen=True)
class PlayerContribution:
    player_id: str
    player_name: str
    holes_contributed: int


@dataclass(frozen=True)
class BestBallStanding:
    team_id: str
    team_name: str
    team_color: str
    total_score: int
    holes_played: int
    relative_to_par: int
    hole_results: List[TeamHole] = field(default_factory=list)
    player_contributions: List[PlayerContribution] = field(default_factory=list)


@dataclass(frozen=True)
class BestBallResult:
    standings: List[BestBallStanding]
    hole_winners: List[BestBallHoleResult]
    holes_played: int


def _best_on_team(
    team: Team,
    hole_scores: Dict[str, int],
    hole: int,
    strokes_per_hole: Optional[StrokesPerHole],
) -> Optional[Tuple[str, int]]:
    best: Optional[Tuple[str, int]] = None
    for pid in team.player_ids:
        if pid not in hole_scores:
            continue
        score = net_score(hole_scores[pid], strokes_per_hole, pid, hole)
        if best is None or score < best[1]:
            best = (pid, score)
    return best


def calculate_best_ball(
    scores: Sequence[Score],
    players: Sequence[Player],
    teams: Sequence[Team],
    hole_info: Sequence[HoleInfo],
    holes_played: int,
    strokes_per_hole: Optional[StrokesPerHole] = None,
) -> BestBallResult:
    """Team standings over holes ``1..holes_played``.

    With net scoring the contributor is whoever is lowest *after* strokes,
    so a teammate with the worse gross score can carry the hole.
    """
    book = ScoreBook(scores, players)
    lookup = player_lookup(players)

    totals = {t.id: 0 for t in teams}
    relative = {t.id: 0 for t in teams}
    played = {t.id: 0 for t in teams}
    team_holes: Dict[str, List[TeamHole]] = {t.id: [] for t in teams}
    contributed: Dict[str, Dict[str, int]] = {
        t.id: {pid: 0 for pid in t.player_ids if pid in lookup} for t in teams
    }
    hole_winners: List[BestBallHoleResult] = []

    for hole in range(1, holes_played + 1):
        if not book.is_complete(hole):
            continue
        hole_scores = book.hole_scores(hole)
        par = par_for(hole_info, hole)
        team_scores: List[TeamHoleScore] = []

        for team in teams:
            best = _best_on_team(team, hole_scores, hole, strokes_per_hole)
            if best is None:
                continue
            contributor_id, best_score = best
            totals[team.id] += best_score
            relative[team.id] += best_score - par
            played[team.id] += 1
            team_holes[team.id].append(
                TeamHole(hole, best_score, contributor_id, lookup[contributor_id].name)
            )
            contributed[team.id][contributor_id] += 1
            team_scores.append(TeamHoleScore(team.id, best_score, contributor_id))

        winning_team_id = None
        if len(team_scores) >= 2:
            ranked = sorted(team_scores, key=lambda ts: ts.best_score)
            if ranked[0].best_score < ranked[1].best_score:
                winning_team_id = ranked[0].team_id
        hole_winners.append(BestBallHoleResult(hole, team_scores, winning_team_id))

    standings = [
        BestBallStanding(
            team_id=team.id,
            team_name=team.name,
            team_color=team.color,
            total_score=totals[team.id],
            holes_played=played[team.id],
            relative_to_par=relative[team.id],
            hole_results=team_holes[team.id],
            player_contributions=[
                PlayerContribution(pid, lookup[pid].name, count)
                for pid, count in contributed[team.id].items()
            ],
        )
        for team in teams
    ]
    standings.sort(key=lambda s: s.total_score)
    return BestBallResult(standings, hole_winners, len(hole_winners))


@dataclass(frozen=True)
class BestBallMatchStatus:
    leading_team_id: Optional[str]
    leading_team_name: Optional[str]
    margin: int
    thru: int
    status: str


@dataclass(frozen=True)
class BestBallMatchResult:
    standings: List[BestBallStanding]
    match_status: BestBallMatchStatus
    hole_winners: List[BestBallHoleResult]


def calculate_best_ball_match(
    scores: Sequence[Score],
    players: Sequence[Player],
    teams: Sequence[Team],
    hole_info: Sequence[HoleInfo],
    holes_played: int,
    strokes_per_hole: Optional[StrokesPerHole] = None,
) -> BestBallMatchResult:
    """Head-to-head best ball between the first two teams."""
    result = calculate_best_ball(scores, players, teams, hole_info, holes_played, strokes_per_hole)
    if len(teams) != 2:
        status = BestBallMatchStatus(None, None, 0, 0, "Best Ball match requires 2 teams")
        return BestBallMatchResult(result.standings, status, result.hole_winners)

    first, second = teams
    first_wins = sum(1 for hw in result.hole_winners if hw.winning_team_id == first.id)
    second_wins = sum(1 for hw in result.hole_winners if hw.winning_team_id == second.id)
    margin = abs(first_wins - second_wins)
    leader = first if first_wins > second_wins else second if second_wins > first_wins else None

    text = f"{leader.name} {margin} UP" if leader else "All Square"
    status = BestBallMatchStatus(
        leading_team_id=leader.id if leader else None,
        leading_team_name=leader.name if leader else None,
        margin=margin,
        thru=result.holes_played,
        status=text,
    )
    return BestBallMatchResult(result.standings, status, result.hole_winners)


def create_default_teams(players: Sequence[Player]) -> List[Team]:
    """2 players play singles, 4 pair up in order, anything else plays singles."""
    if len(players) == 4:
        pairs = (players[0:2], players[2:4])
        return [
            Team(
                id=f"team-{i + 1}",
                name=" & ".join(p.first_name for p in pair),
                player_ids=tuple(p.id for p in pair),
                color=TEAM_COLORS[i],
            )
            for i, pair in enumerate(pairs)
        ]
    return [
        Team(
            id=f"team-{i + 1}",
            name=p.name,
            player_ids=(p.id,),
            color=TEAM_COLORS[i % len(TEAM_COLORS)],
        )
        for i, p in enumerate(players)
    ]


def format_best_ball_status(relative_to_par: int) -> str:
    if relative_to_par == 0:
        return "E"
    if relative_to_par > 0:
        return f"+{relative_to_par}"
    return str(relative_to_par)


@dataclass(frozen=True)
class BestBallHoleContext:
    status: str
    leading_team_id: Optional[str]
    margin: int
    holes_remaining: int
    urgency: str
    message: str


def get_best_ball_hole_context(
    scores: Sequence[Score],
    players: Sequence[Player],
    teams: Sequence[Team],
    hole_info: Sequence[HoleInfo],
    current_hole: int,
    strokes_per_hole: Optional[StrokesPerHole] = None,
    total_holes: Optional[int] = None,
) -> BestBallHoleContext:
    """Match standing going into ``current_hole``."""
    total = total_holes or len(hole_info) or 18
    match = calculate_best_ball_match(
        scores, players, teams, hole_info, current_hole - 1, strokes_per_hole
    )
    status = match.match_status
    holes_remaining = max(0, total - current_hole + 1)
    urgency, message = classify_urgency(status.margin, holes_remaining)
    return BestBallHoleContext(
        status=status.status,
        leading_team_id=status.leading_team_id,
        margin=status.margin,
        holes_remaining=holes_remaining,
        urgency=urgency,
        message=message,
    )
