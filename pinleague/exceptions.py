"""Exceptions raised by league operations."""


class LeagueError(Exception):
    """Base class for league engine errors."""


class NotFoundError(LeagueError, LookupError):
    """A referenced entity does not exist."""

    entity = 'Entity'

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f'{self.entity} {entity_id} not found')


class LeagueNotFoundError(NotFoundError):
    entity = 'League'


class TeamNotFoundError(NotFoundError):
    entity = 'Team'


class GameNotFoundError(NotFoundError):
    entity = 'Game'


class SelfPlayError(LeagueError, ValueError):
    """A game was scheduled with the same team on both sides."""

    def __init__(self, team_id: str):
        self.team_id = team_id
        super().__init__(f'Team {team_id} cannot play itself')


class ScoreSubmissionError(LeagueError, ValueError):
    """
    A score batch was rejected.

    Carries every validation error found; nothing from the batch was written.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__('Score submission rejected:\n' + '\n'.join(f'  - {e}' for e in self.errors))
