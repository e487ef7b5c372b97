from .models import BowlerWithStats, TeamWithStats, StandingsEntry, SeriesResult
from .schemas import (
    League,
    Team,
    Bowler,
    Game,
    Score,
    ScoreEntry,
    MatchupPoints,
    SimplePoints,
)
from .exceptions import (
    LeagueError,
    NotFoundError,
    LeagueNotFoundError,
    TeamNotFoundError,
    GameNotFoundError,
    SelfPlayError,
    ScoreSubmissionError,
)
from .repository import Repository, InMemoryRepository, JsonRepository
from .handicap import calculate_handicap, handicap_breakdown
from .scoring import score_matchup, score_simple, score_series
from .stats import get_bowler_with_stats, get_team_with_stats, summarize_scores
from .standings import (
    get_team_standings,
    get_individual_standings,
    get_weeks_completed,
    get_current_week,
    get_teams_with_stats,
    finalize_league,
    league_summary,
)
from .submission import save_game_scores, scores_from_grid
from .validators import validate_score_submission
from .extraction import (
    parse_roster_extraction,
    parse_score_extraction,
    match_bowler,
    merge_extracted_scores,
    roster_to_bowlers,
)
from .export import write_standings_workbook

__all__ = [
    # Derived models
    'BowlerWithStats',
    'TeamWithStats',
    'StandingsEntry',
    'SeriesResult',
    # Entities
    'League',
    'Team',
    'Bowler',
    'Game',
    'Score',
    'ScoreEntry',
    'MatchupPoints',
    'SimplePoints',
    # Errors
    'LeagueError',
    'NotFoundError',
    'LeagueNotFoundError',
    'TeamNotFoundError',
    'GameNotFoundError',
    'SelfPlayError',
    'ScoreSubmissionError',
    # Storage
    'Repository',
    'InMemoryRepository',
    'JsonRepository',
    # Handicap and points
    'calculate_handicap',
    'handicap_breakdown',
    'score_matchup',
    'score_simple',
    'score_series',
    # Statistics
    'get_bowler_with_stats',
    'get_team_with_stats',
    'summarize_scores',
    # Standings
    'get_team_standings',
    'get_individual_standings',
    'get_weeks_completed',
    'get_current_week',
    'get_teams_with_stats',
    'finalize_league',
    'league_summary',
    # Score entry
    'save_game_scores',
    'scores_from_grid',
    'validate_score_submission',
    # Photo extraction
    'parse_roster_extraction',
    'parse_score_extraction',
    'match_bowler',
    'merge_extracted_scores',
    'roster_to_bowlers',
    # Export
    'write_standings_workbook',
]
