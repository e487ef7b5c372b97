"""Point systems for a completed game between two teams."""

import logging

from .constants import LOSS, TIE, WIN
from .models import Line, SeriesResult
from .schemas import MatchupPoints, PointSystem, SimplePoints

logger = logging.getLogger('pinleague.scoring')


def _outcome(team_total: int, opponent_total: int) -> str:
    if team_total > opponent_total:
        return WIN
    if team_total < opponent_total:
        return LOSS
    return TIE


def score_matchup(
    team_lines: list[Line],
    opponent_lines: list[Line],
    games_per_session: int,
    points: MatchupPoints,
) -> SeriesResult:
    """
    Score a game under the matchup system.

    Scoring, for each game number of the session:
        - Bowlers are paired by position, in the order their scores were recorded
        - Higher score + handicap wins points_per_individual_game
        - A bowler whose opponent slot is vacant wins by default
        - Higher team game total wins points_per_team_game
    Then a higher series total wins points_per_team_series.

    Win/loss/tie comes from the series comparison alone.

    Args:
        team_lines: This team's score rows, in recorded order
        opponent_lines: Opponent's score rows, in recorded order
        games_per_session: Number of games in the session
        points: Matchup point values

    Returns:
        SeriesResult from this team's side
    """
    total_points = 0
    team_series = 0
    opponent_series = 0

    for game_number in range(1, games_per_session + 1):
        team_game = [ln for ln in team_lines if ln.game_number == game_number]
        opponent_game = [ln for ln in opponent_lines if ln.game_number == game_number]

        team_game_total = 0
        opponent_game_total = 0

        for pos in range(max(len(team_game), len(opponent_game))):
            ours = team_game[pos] if pos < len(team_game) else None
            theirs = opponent_game[pos] if pos < len(opponent_game) else None

            if ours is not None:
                team_game_total += ours.total
            if theirs is not None:
                opponent_game_total += theirs.total

            if ours is not None and (theirs is None or ours.total > theirs.total):
                total_points += points.points_per_individual_game

        team_series += team_game_total
        opponent_series += opponent_game_total

        if team_game_total > opponent_game_total:
            total_points += points.points_per_team_game

    stray = [ln for ln in team_lines + opponent_lines if not 1 <= ln.game_number <= games_per_session]
    if stray:
        logger.debug(f'Ignored {len(stray)} score rows outside games 1-{games_per_session}')

    outcome = _outcome(team_series, opponent_series)
    if outcome == WIN:
        total_points += points.points_per_team_series

    return SeriesResult(
        points=total_points,
        outcome=outcome,
        team_total=team_series,
        opponent_total=opponent_series,
    )


def score_simple(
    team_lines: list[Line],
    opponent_lines: list[Line],
    points: SimplePoints,
) -> SeriesResult:
    """Score a game on the overall series total alone."""
    team_series = sum(ln.total for ln in team_lines)
    opponent_series = sum(ln.total for ln in opponent_lines)

    outcome = _outcome(team_series, opponent_series)
    awarded = {
        WIN: points.points_per_win,
        LOSS: points.points_per_loss,
        TIE: points.points_per_tie,
    }[outcome]

    return SeriesResult(
        points=awarded,
        outcome=outcome,
        team_total=team_series,
        opponent_total=opponent_series,
    )


def score_series(
    team_lines: list[Line],
    opponent_lines: list[Line],
    games_per_session: int,
    point_system: PointSystem,
) -> SeriesResult:
    """Score a completed game with whichever point system the league uses."""
    if isinstance(point_system, SimplePoints):
        return score_simple(team_lines, opponent_lines, point_system)
    return score_matchup(team_lines, opponent_lines, games_per_session, point_system)
