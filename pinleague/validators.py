"""Validation for score submissions."""

from typing import Optional

from .repository import Repository
from .schemas import Game, League, ScoreEntry


def validate_score_submission(
    repo: Repository,
    game: Game,
    entries: list[ScoreEntry],
    league: Optional[League] = None,
) -> list[str]:
    """
    Validate a batch of scores before it replaces a game's scores.

    Checks:
    - The game is not a team playing itself
    - Every bowler exists
    - Every score's team is one of the game's two teams
    - Every bowler is on the team the score was submitted for
    - Game numbers fit the league's session length
    - No bowler has two scores for the same game number

    Args:
        repo: Entity repository
        game: Game the scores belong to
        entries: Submitted scores
        league: League of the game (session length check skipped if None)

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if game.team1_id == game.team2_id:
        errors.append(f'Game {game.id} has team {game.team1_id} on both sides')

    game_teams = {game.team1_id, game.team2_id}
    seen = set()
    duplicates = []

    for entry in entries:
        bowler = repo.get_bowler(entry.bowler_id)
        if bowler is None:
            errors.append(f'Bowler {entry.bowler_id} not found')
            continue

        if entry.team_id not in game_teams:
            errors.append(f'Team {entry.team_id} is not part of this game')
        elif bowler.team_id != entry.team_id:
            errors.append(f'Bowler {bowler.name} is not on team {entry.team_id}')

        if league is not None and entry.game_number > league.games_per_session:
            errors.append(
                f'{bowler.name} has a score for game {entry.game_number} '
                f'(league bowls {league.games_per_session} per session)'
            )

        key = (entry.bowler_id, entry.game_number)
        if key in seen:
            duplicates.append(f'{bowler.name} game {entry.game_number}')
        seen.add(key)

    if duplicates:
        errors.append(f'Duplicate scores submitted: {", ".join(duplicates)}')

    return errors
