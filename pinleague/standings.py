"""League standings: ranked teams, ranked bowlers, and season progress."""

import logging
from typing import Any, Optional

from .constants import RECENT_GAMES_LIMIT
from .models import BowlerWithStats, StandingsEntry, TeamWithStats
from .repository import Repository
from .stats import get_bowler_with_stats, get_team_with_stats

logger = logging.getLogger('pinleague.standings')


def get_teams_with_stats(repo: Repository, league_id: str) -> list[TeamWithStats]:
    """Get every team in a league with stats, sorted by total points."""
    league = repo.get_league(league_id)
    if league is None:
        return []

    teams = []
    for team in repo.get_teams(league_id):
        stats = get_team_with_stats(repo, team.id, league)
        if stats:
            teams.append(stats)

    return sorted(teams, key=lambda t: t.total_points, reverse=True)


def get_team_standings(repo: Repository, league_id: str) -> list[StandingsEntry]:
    """
    Rank the teams of a league.

    Sort order:
        1. Points, descending
        2. Scratch pins plus handicap pins (when the league uses handicap), descending

    Teams equal on both keys keep their original order and still get
    distinct consecutive ranks.

    Args:
        repo: Entity repository
        league_id: League to rank

    Returns:
        Ranked StandingsEntry list (empty if the league doesn't exist)
    """
    league = repo.get_league(league_id)
    if league is None:
        logger.debug(f'No standings for missing league {league_id}')
        return []

    entries = []
    for team in repo.get_teams(league_id):
        stats = get_team_with_stats(repo, team.id, league)
        if stats is None:
            continue
        entries.append(
            StandingsEntry(
                rank=0,
                team=stats,
                scratch_total=stats.total_pins,
                handicap_total=stats.handicap_pins,
                points=stats.total_points,
            )
        )

    def pin_total(entry: StandingsEntry) -> int:
        return entry.scratch_total + (entry.handicap_total if league.use_handicap else 0)

    entries.sort(key=lambda e: (e.points, pin_total(e)), reverse=True)

    for rank, entry in enumerate(entries, 1):
        entry.rank = rank

    return entries


def get_individual_standings(repo: Repository, league_id: str) -> list[BowlerWithStats]:
    """Get every bowler in a league, sorted by average (highest first)."""
    league = repo.get_league(league_id)
    if league is None:
        return []

    bowlers = []
    for bowler in repo.get_bowlers(league_id=league_id):
        stats = get_bowler_with_stats(repo, bowler.id, league)
        if stats:
            bowlers.append(stats)

    return sorted(bowlers, key=lambda b: b.average, reverse=True)


def get_weeks_completed(repo: Repository, league_id: str) -> int:
    """Get the highest week with a completed game, or 0."""
    weeks = [g.week for g in repo.get_games(league_id) if g.completed]
    return max(weeks, default=0)


def get_current_week(repo: Repository, league_id: str) -> int:
    """Get the week scores are being entered for next."""
    return get_weeks_completed(repo, league_id) + 1


def finalize_league(repo: Repository, league_id: str) -> Optional[list[StandingsEntry]]:
    """
    Close out a season.

    Marks the league completed and returns its final standings.

    Returns:
        Final standings, or None if the league doesn't exist
    """
    league = repo.update_league(league_id, status='completed')
    if league is None:
        return None

    standings = get_team_standings(repo, league_id)
    if standings:
        leader = standings[0]
        logger.info(
            f'Finalized {league.name}: {leader.team.name} finished first '
            f'with {leader.points:g} points'
        )
    return standings


def league_summary(repo: Repository, league_id: str) -> Optional[dict[str, Any]]:
    """
    Collect everything the league overview shows.

    Returns:
        Dict with league, teams, team_standings, individual_standings,
        recent_games, and weeks_completed; None if the league doesn't exist
    """
    league = repo.get_league(league_id)
    if league is None:
        return None

    return {
        'league': league,
        'teams': repo.get_teams(league_id),
        'team_standings': get_team_standings(repo, league_id),
        'individual_standings': get_individual_standings(repo, league_id),
        'recent_games': repo.get_games(league_id)[-RECENT_GAMES_LIMIT:],
        'weeks_completed': get_weeks_completed(repo, league_id),
    }
