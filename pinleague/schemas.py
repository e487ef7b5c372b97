"""Pydantic schemas for league entities and the JSON data file."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from .constants import (
    MAX_GAMES_PER_SESSION,
    MAX_HANDICAP_BASIS,
    MAX_HANDICAP_CAP,
    MAX_HANDICAP_PERCENTAGE,
    MAX_SCORE,
    MAX_TEAM_SIZE,
    MAX_WEEKS,
    MIN_HANDICAP_BASIS,
    MIN_SCORE,
)


class MatchupPoints(BaseModel):
    """Points for bowler-vs-bowler games, team games, and the team series."""

    type: Literal['matchup'] = 'matchup'
    points_per_individual_game: int | float = Field(default=1, ge=0)
    points_per_team_game: int | float = Field(default=1, ge=0)
    points_per_team_series: int | float = Field(default=2, ge=0)

    class Config:
        extra = 'forbid'


class SimplePoints(BaseModel):
    """Points awarded only on the overall series result."""

    type: Literal['simple'] = 'simple'
    points_per_win: int | float = Field(..., ge=0)
    points_per_tie: int | float = Field(..., ge=0)
    points_per_loss: int | float = Field(..., ge=0)

    class Config:
        extra = 'forbid'


PointSystem = Annotated[MatchupPoints | SimplePoints, Field(discriminator='type')]


class LeagueCreate(BaseModel):
    """League configuration as submitted by the organizer."""

    name: str = Field(..., min_length=1)
    team_size: int = Field(..., ge=1, le=MAX_TEAM_SIZE)
    games_per_session: int = Field(..., ge=1, le=MAX_GAMES_PER_SESSION)
    total_weeks: int = Field(..., ge=1, le=MAX_WEEKS)
    handicap_basis: int = Field(..., ge=MIN_HANDICAP_BASIS, le=MAX_HANDICAP_BASIS)
    handicap_percentage: float = Field(..., ge=0, le=MAX_HANDICAP_PERCENTAGE)
    max_handicap: int = Field(..., ge=0, le=MAX_HANDICAP_CAP)
    use_handicap: bool = True
    point_system: PointSystem = Field(default_factory=MatchupPoints)
    bonus_points_for_series: bool = False

    class Config:
        extra = 'forbid'


class League(LeagueCreate):
    """A configured league."""

    id: str
    status: str = Field(default='active', pattern=r'^(active|completed)$')

    @property
    def point_system_type(self) -> str:
        return self.point_system.type


class TeamCreate(BaseModel):
    league_id: str
    name: str = Field(..., min_length=1)

    class Config:
        extra = 'forbid'


class Team(TeamCreate):
    id: str


class BowlerCreate(BaseModel):
    team_id: str
    league_id: str
    name: str = Field(..., min_length=1)
    starting_average: float = Field(..., ge=0, le=MAX_SCORE)

    class Config:
        extra = 'forbid'


class Bowler(BowlerCreate):
    id: str


class GameCreate(BaseModel):
    """A scheduled match between two teams in one week."""

    league_id: str
    week: int = Field(..., ge=1)
    team1_id: str
    team2_id: str

    class Config:
        extra = 'forbid'


class Game(GameCreate):
    id: str
    completed: bool = False


class ScoreEntry(BaseModel):
    """One submitted score: a bowler's pins for one game of the session."""

    bowler_id: str = Field(..., min_length=1)
    team_id: str = Field(..., min_length=1)
    game_number: int = Field(..., ge=1, le=MAX_GAMES_PER_SESSION)
    score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)

    class Config:
        extra = 'forbid'


class Score(ScoreEntry):
    id: str
    game_id: str


class LeagueDataFile(BaseModel):
    """Complete league data file structure."""

    leagues: list[League] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)
    bowlers: list[Bowler] = Field(default_factory=list)
    games: list[Game] = Field(default_factory=list)
    scores: list[Score] = Field(default_factory=list)

    class Config:
        extra = 'forbid'


class LeagueDefaults(BaseModel):
    """Defaults offered when creating a new league."""

    team_size: int = Field(default=4, ge=1, le=MAX_TEAM_SIZE)
    games_per_session: int = Field(default=3, ge=1, le=MAX_GAMES_PER_SESSION)
    total_weeks: int = Field(default=30, ge=1, le=MAX_WEEKS)
    handicap_basis: int = Field(default=210, ge=MIN_HANDICAP_BASIS, le=MAX_HANDICAP_BASIS)
    handicap_percentage: float = Field(default=90, ge=0, le=MAX_HANDICAP_PERCENTAGE)
    max_handicap: int = Field(default=63, ge=0, le=MAX_HANDICAP_CAP)
    use_handicap: bool = True
    point_system: PointSystem = Field(default_factory=MatchupPoints)

    class Config:
        extra = 'forbid'


class AppConfig(BaseModel):
    """Application configuration settings."""

    data_file: str = Field(default='data/league_data.json', min_length=1)
    log_dir: str = Field(default='logs', min_length=1)
    default_league: LeagueDefaults = Field(default_factory=LeagueDefaults)

    @field_validator('data_file')
    @classmethod
    def validate_data_file(cls, v):
        """Ensure the data file is a JSON document."""
        if not v.endswith('.json'):
            raise ValueError(f'data_file must be a .json path, got {v}')
        return v

    class Config:
        extra = 'forbid'


class ExtractedBowler(BaseModel):
    """A roster line read from a photo."""

    name: str
    starting_average: float = Field(..., ge=MIN_SCORE, le=MAX_SCORE, alias='startingAverage')
    confidence: str = Field(..., pattern=r'^(high|medium|low)$')

    class Config:
        populate_by_name = True


class RosterExtraction(BaseModel):
    """Roster photo extraction result."""

    team_name: str | None = Field(None, alias='teamName')
    bowlers: list[ExtractedBowler] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class ExtractedScore(BaseModel):
    """One bowler's games read from a score sheet photo."""

    bowler_name: str = Field(..., alias='bowlerName')
    game1: int | None = Field(None, ge=MIN_SCORE, le=MAX_SCORE)
    game2: int | None = Field(None, ge=MIN_SCORE, le=MAX_SCORE)
    game3: int | None = Field(None, ge=MIN_SCORE, le=MAX_SCORE)
    confidence: str = Field(..., pattern=r'^(high|medium|low)$')

    class Config:
        populate_by_name = True

    @property
    def games(self) -> list[int | None]:
        return [self.game1, self.game2, self.game3]


class ScoreExtraction(BaseModel):
    """Score sheet photo extraction result."""

    scores: list[ExtractedScore] = Field(default_factory=list)
