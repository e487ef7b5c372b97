"""Bowler and team statistics built from raw score rows."""

import logging
from typing import Optional

from .constants import LOSS, SERIES_LENGTH, WIN
from .handicap import calculate_handicap
from .models import BowlerWithStats, Line, TeamWithStats
from .repository import Repository
from .schemas import Bowler, League, Score
from .scoring import score_series

logger = logging.getLogger('pinleague.stats')


def summarize_scores(bowler: Bowler, scores: list[Score], league: League) -> BowlerWithStats:
    """
    Compute a bowler's statistics from their score rows.

    Rules:
        - Average is total pins / games, or the starting average with no games
        - High series is the sum of the three best games (any weeks), or all
          pins when fewer than three games exist

    Args:
        bowler: The bowler
        scores: Every score row the bowler has
        league: League whose handicap settings apply

    Returns:
        BowlerWithStats
    """
    pins = [s.score for s in scores]
    games_played = len(pins)
    total_pins = sum(pins)
    average = total_pins / games_played if games_played > 0 else bowler.starting_average

    if games_played >= SERIES_LENGTH:
        high_series = sum(sorted(pins, reverse=True)[:SERIES_LENGTH])
    else:
        high_series = total_pins

    return BowlerWithStats(
        bowler=bowler,
        games_played=games_played,
        total_pins=total_pins,
        average=average,
        handicap=calculate_handicap(average, league),
        high_game=max(pins, default=0),
        high_series=high_series,
    )


def get_bowler_with_stats(
    repo: Repository, bowler_id: str, league: League
) -> Optional[BowlerWithStats]:
    """Get a bowler with statistics, or None if the bowler doesn't exist."""
    bowler = repo.get_bowler(bowler_id)
    if bowler is None:
        return None
    return summarize_scores(bowler, repo.get_scores_by_bowler(bowler_id), league)


def get_team_with_stats(
    repo: Repository, team_id: str, league: League
) -> Optional[TeamWithStats]:
    """
    Get a team with its record, pins, and points from completed games.

    Pins and handicap pins count every score row the team bowled in a
    completed game; handicap is added once per row, so a bowler who bowls
    three games contributes their handicap three times.

    Args:
        repo: Entity repository
        team_id: Team to aggregate
        league: League configuration (point system, handicap settings)

    Returns:
        TeamWithStats, or None if the team doesn't exist
    """
    team = repo.get_team(team_id)
    if team is None:
        return None

    bowlers = []
    for bowler in repo.get_bowlers(team_id=team_id):
        stats = get_bowler_with_stats(repo, bowler.id, league)
        if stats:
            bowlers.append(stats)

    # Bowler stats for this call only
    stats_cache: dict[str, Optional[BowlerWithStats]] = {b.id: b for b in bowlers}

    def handicap_for(bowler_id: str) -> int:
        if bowler_id not in stats_cache:
            stats_cache[bowler_id] = get_bowler_with_stats(repo, bowler_id, league)
            if stats_cache[bowler_id] is None:
                logger.warning(f'Bowler {bowler_id} has scores but no longer exists; handicap 0')
        stats = stats_cache[bowler_id]
        return stats.handicap if stats and league.use_handicap else 0

    def lines_for(scores: list[Score]) -> list[Line]:
        return [
            Line(
                bowler_id=s.bowler_id,
                game_number=s.game_number,
                score=s.score,
                handicap=handicap_for(s.bowler_id),
            )
            for s in scores
        ]

    result = TeamWithStats(team=team, bowlers=bowlers)

    team_games = [
        g
        for g in repo.get_games(league.id)
        if g.completed and team_id in (g.team1_id, g.team2_id)
    ]

    for game in team_games:
        if game.team1_id == game.team2_id:
            logger.warning(f'Skipping game {game.id}: team {team_id} is on both sides')
            continue

        opponent_id = game.team2_id if game.team1_id == team_id else game.team1_id
        game_scores = repo.get_scores(game.id)
        team_lines = lines_for([s for s in game_scores if s.team_id == team_id])
        opponent_lines = lines_for([s for s in game_scores if s.team_id == opponent_id])

        for line in team_lines:
            result.total_pins += line.score
            result.handicap_pins += line.handicap

        series = score_series(
            team_lines, opponent_lines, league.games_per_session, league.point_system
        )
        result.total_points += series.points
        if series.outcome == WIN:
            result.wins += 1
        elif series.outcome == LOSS:
            result.losses += 1
        else:
            result.ties += 1
        result.games_played += 1

    return result
