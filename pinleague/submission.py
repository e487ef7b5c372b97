"""Saving a game's scores."""

import logging
from typing import Iterable, Optional

from .exceptions import GameNotFoundError, ScoreSubmissionError
from .repository import Repository
from .schemas import Score, ScoreEntry
from .validators import validate_score_submission

logger = logging.getLogger('pinleague.submission')


def save_game_scores(
    repo: Repository,
    game_id: str,
    entries: Iterable[ScoreEntry | dict],
) -> list[Score]:
    """
    Replace all scores of a game with a new set and mark it completed.

    The batch is validated as a whole first; on any error nothing is written.
    Partial sets (fewer rows than bowlers x games) and empty sets are valid.

    Args:
        repo: Entity repository
        game_id: Game to save scores for
        entries: Submitted scores, in lineup order

    Returns:
        The stored Score rows

    Raises:
        GameNotFoundError: If the game doesn't exist
        ScoreSubmissionError: If any submitted score is invalid
        pydantic.ValidationError: If a score is out of range
    """
    game = repo.get_game(game_id)
    if game is None:
        raise GameNotFoundError(game_id)

    entries = [ScoreEntry.model_validate(e) for e in entries]
    league = repo.get_league(game.league_id)

    errors = validate_score_submission(repo, game, entries, league)
    if errors:
        logger.warning(f'Rejected {len(entries)} scores for game {game_id}: {len(errors)} errors')
        raise ScoreSubmissionError(errors)

    return repo.replace_game_scores(game_id, entries)


def scores_from_grid(
    team_id: str, grid: dict[str, list[Optional[int]]]
) -> list[ScoreEntry]:
    """
    Build score entries from a score sheet grid.

    Args:
        team_id: Team the bowlers bowl for
        grid: Bowler id -> pins per game (index 0 is game 1); blank or zero
              cells are games not bowled

    Returns:
        ScoreEntry list in grid order
    """
    entries = []
    for bowler_id, games in grid.items():
        for index, pins in enumerate(games):
            if pins:
                entries.append(
                    ScoreEntry(
                        bowler_id=bowler_id,
                        team_id=team_id,
                        game_number=index + 1,
                        score=pins,
                    )
                )
    return entries
