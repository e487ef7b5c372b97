"""Derived statistics containers; recomputed on demand, never persisted."""

from dataclasses import dataclass, field

from .schemas import Bowler, Team


@dataclass
class BowlerWithStats:
    """A bowler plus statistics computed from their score history."""
    bowler: Bowler
    games_played: int = 0
    total_pins: int = 0
    average: float = 0.0
    handicap: int = 0
    high_game: int = 0
    high_series: int = 0

    @property
    def id(self) -> str:
        return self.bowler.id

    @property
    def name(self) -> str:
        return self.bowler.name

    @property
    def team_id(self) -> str:
        return self.bowler.team_id


@dataclass
class TeamWithStats:
    """A team plus its record and pin totals from completed games."""
    team: Team
    bowlers: list[BowlerWithStats] = field(default_factory=list)
    total_points: int | float = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    total_pins: int = 0
    handicap_pins: int = 0
    games_played: int = 0  # completed games, not score rows

    @property
    def id(self) -> str:
        return self.team.id

    @property
    def name(self) -> str:
        return self.team.name

    @property
    def record(self) -> str:
        return f'{self.wins}-{self.losses}-{self.ties}'


@dataclass
class StandingsEntry:
    """One ranked row of the team standings."""
    rank: int
    team: TeamWithStats
    scratch_total: int
    handicap_total: int
    points: int | float


@dataclass
class Line:
    """A single score row with the bowler's handicap applied."""
    bowler_id: str
    game_number: int
    score: int
    handicap: int = 0

    @property
    def total(self) -> int:
        return self.score + self.handicap


@dataclass
class SeriesResult:
    """Outcome of one completed game from one team's side."""
    points: int | float
    outcome: str  # win | loss | tie
    team_total: int
    opponent_total: int
