"""Entity storage for leagues, teams, bowlers, games, and scores.

The statistics and standings functions take a repository argument instead of
reaching for a global store.

Deletes cascade:
    - League -> its teams and games
    - Team -> its bowlers
    - Bowler -> every score they bowled
    - Game -> its scores only

Creates and updates raise a NotFoundError subclass when a referenced parent
is missing, and SelfPlayError for a game with one team on both sides.
Score rows may still name bowlers that no longer exist.
"""

import logging
import uuid
from pathlib import Path
from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from .exceptions import GameNotFoundError, LeagueNotFoundError, SelfPlayError, TeamNotFoundError
from .schemas import (
    Bowler,
    BowlerCreate,
    Game,
    GameCreate,
    League,
    LeagueCreate,
    LeagueDataFile,
    Score,
    ScoreEntry,
    Team,
    TeamCreate,
)
from .utils import load_json, save_json

logger = logging.getLogger('pinleague.repository')


@runtime_checkable
class Repository(Protocol):
    """Storage interface the league engine depends on."""

    def get_leagues(self) -> list[League]: ...
    def get_league(self, league_id: str) -> Optional[League]: ...
    def create_league(self, data: LeagueCreate | dict) -> League: ...
    def update_league(self, league_id: str, **updates: Any) -> Optional[League]: ...
    def delete_league(self, league_id: str) -> bool: ...

    def get_teams(self, league_id: Optional[str] = None) -> list[Team]: ...
    def get_team(self, team_id: str) -> Optional[Team]: ...
    def create_team(self, data: TeamCreate | dict) -> Team: ...
    def update_team(self, team_id: str, **updates: Any) -> Optional[Team]: ...
    def delete_team(self, team_id: str) -> bool: ...

    def get_bowlers(
        self, league_id: Optional[str] = None, team_id: Optional[str] = None
    ) -> list[Bowler]: ...
    def get_bowler(self, bowler_id: str) -> Optional[Bowler]: ...
    def create_bowler(self, data: BowlerCreate | dict) -> Bowler: ...
    def update_bowler(self, bowler_id: str, **updates: Any) -> Optional[Bowler]: ...
    def delete_bowler(self, bowler_id: str) -> bool: ...

    def get_games(self, league_id: Optional[str] = None) -> list[Game]: ...
    def get_game(self, game_id: str) -> Optional[Game]: ...
    def create_game(self, data: GameCreate | dict) -> Game: ...
    def update_game(self, game_id: str, **updates: Any) -> Optional[Game]: ...
    def delete_game(self, game_id: str) -> bool: ...

    def get_scores(self, game_id: Optional[str] = None) -> list[Score]: ...
    def get_scores_by_bowler(self, bowler_id: str) -> list[Score]: ...
    def create_score(self, game_id: str, entry: ScoreEntry | dict) -> Score: ...
    def delete_score(self, score_id: str) -> bool: ...
    def delete_scores_by_game(self, game_id: str) -> bool: ...
    def replace_game_scores(
        self, game_id: str, entries: Iterable[ScoreEntry | dict]
    ) -> list[Score]: ...


def _new_id() -> str:
    return str(uuid.uuid4())


def _updated(entity, updates: dict):
    """Return a re-validated copy of an entity with updates applied."""
    updates = {k: v for k, v in updates.items() if k != 'id'}
    return type(entity).model_validate({**entity.model_dump(), **updates})


class InMemoryRepository:
    """
    Dict-backed repository.

    Entities are kept in insertion order, which is the order every list
    method returns them in. Score order within a game is significant: the
    matchup point system pairs bowlers by the position their scores were
    recorded in.
    """

    def __init__(self, data: Optional[LeagueDataFile] = None):
        self._leagues: dict[str, League] = {}
        self._teams: dict[str, Team] = {}
        self._bowlers: dict[str, Bowler] = {}
        self._games: dict[str, Game] = {}
        self._scores: dict[str, Score] = {}
        if data is not None:
            self._load(data)

    def _load(self, data: LeagueDataFile) -> None:
        self._leagues = {lg.id: lg for lg in data.leagues}
        self._teams = {t.id: t for t in data.teams}
        self._bowlers = {b.id: b for b in data.bowlers}
        self._games = {g.id: g for g in data.games}
        self._scores = {s.id: s for s in data.scores}

    def to_data_file(self) -> LeagueDataFile:
        """Snapshot the store as a LeagueDataFile."""
        return LeagueDataFile(
            leagues=list(self._leagues.values()),
            teams=list(self._teams.values()),
            bowlers=list(self._bowlers.values()),
            games=list(self._games.values()),
            scores=list(self._scores.values()),
        )

    def _commit(self) -> None:
        """Hook called after every mutation; persistent subclasses save here."""

    def _require_league(self, league_id: str) -> None:
        if league_id not in self._leagues:
            raise LeagueNotFoundError(league_id)

    def _require_team(self, team_id: str) -> None:
        if team_id not in self._teams:
            raise TeamNotFoundError(team_id)

    # Leagues

    def get_leagues(self) -> list[League]:
        return list(self._leagues.values())

    def get_league(self, league_id: str) -> Optional[League]:
        return self._leagues.get(league_id)

    def create_league(self, data: LeagueCreate | dict) -> League:
        payload = LeagueCreate.model_validate(data)
        league = League(**payload.model_dump(), id=_new_id())
        self._leagues[league.id] = league
        logger.info(f'Created league {league.name} ({league.id})')
        self._commit()
        return league

    def update_league(self, league_id: str, **updates: Any) -> Optional[League]:
        league = self._leagues.get(league_id)
        if league is None:
            return None
        league = _updated(league, updates)
        self._leagues[league_id] = league
        self._commit()
        return league

    def delete_league(self, league_id: str) -> bool:
        if league_id not in self._leagues:
            return False
        for team in self.get_teams(league_id):
            self._delete_team(team.id)
        for game in self.get_games(league_id):
            self._delete_game(game.id)
        del self._leagues[league_id]
        logger.info(f'Deleted league {league_id}')
        self._commit()
        return True

    # Teams

    def get_teams(self, league_id: Optional[str] = None) -> list[Team]:
        teams = list(self._teams.values())
        if league_id:
            teams = [t for t in teams if t.league_id == league_id]
        return teams

    def get_team(self, team_id: str) -> Optional[Team]:
        return self._teams.get(team_id)

    def create_team(self, data: TeamCreate | dict) -> Team:
        payload = TeamCreate.model_validate(data)
        self._require_league(payload.league_id)
        team = Team(**payload.model_dump(), id=_new_id())
        self._teams[team.id] = team
        self._commit()
        return team

    def update_team(self, team_id: str, **updates: Any) -> Optional[Team]:
        team = self._teams.get(team_id)
        if team is None:
            return None
        team = _updated(team, updates)
        if 'league_id' in updates:
            self._require_league(team.league_id)
        self._teams[team_id] = team
        self._commit()
        return team

    def _delete_team(self, team_id: str) -> bool:
        for bowler in self.get_bowlers(team_id=team_id):
            self._delete_bowler(bowler.id)
        return self._teams.pop(team_id, None) is not None

    def delete_team(self, team_id: str) -> bool:
        deleted = self._delete_team(team_id)
        if deleted:
            self._commit()
        return deleted

    # Bowlers

    def get_bowlers(
        self, league_id: Optional[str] = None, team_id: Optional[str] = None
    ) -> list[Bowler]:
        bowlers = list(self._bowlers.values())
        if league_id:
            bowlers = [b for b in bowlers if b.league_id == league_id]
        if team_id:
            bowlers = [b for b in bowlers if b.team_id == team_id]
        return bowlers

    def get_bowler(self, bowler_id: str) -> Optional[Bowler]:
        return self._bowlers.get(bowler_id)

    def create_bowler(self, data: BowlerCreate | dict) -> Bowler:
        payload = BowlerCreate.model_validate(data)
        self._require_team(payload.team_id)
        self._require_league(payload.league_id)
        bowler = Bowler(**payload.model_dump(), id=_new_id())
        self._bowlers[bowler.id] = bowler
        self._commit()
        return bowler

    def update_bowler(self, bowler_id: str, **updates: Any) -> Optional[Bowler]:
        bowler = self._bowlers.get(bowler_id)
        if bowler is None:
            return None
        bowler = _updated(bowler, updates)
        if 'team_id' in updates:
            self._require_team(bowler.team_id)
        if 'league_id' in updates:
            self._require_league(bowler.league_id)
        self._bowlers[bowler_id] = bowler
        self._commit()
        return bowler

    def _delete_bowler(self, bowler_id: str) -> bool:
        self._scores = {k: s for k, s in self._scores.items() if s.bowler_id != bowler_id}
        return self._bowlers.pop(bowler_id, None) is not None

    def delete_bowler(self, bowler_id: str) -> bool:
        deleted = self._delete_bowler(bowler_id)
        if deleted:
            self._commit()
        return deleted

    # Games

    def get_games(self, league_id: Optional[str] = None) -> list[Game]:
        games = list(self._games.values())
        if league_id:
            games = [g for g in games if g.league_id == league_id]
        return games

    def get_game(self, game_id: str) -> Optional[Game]:
        return self._games.get(game_id)

    def create_game(self, data: GameCreate | dict) -> Game:
        payload = GameCreate.model_validate(data)
        if payload.team1_id == payload.team2_id:
            raise SelfPlayError(payload.team1_id)
        self._require_league(payload.league_id)
        self._require_team(payload.team1_id)
        self._require_team(payload.team2_id)
        game = Game(**payload.model_dump(), id=_new_id())
        self._games[game.id] = game
        self._commit()
        return game

    def update_game(self, game_id: str, **updates: Any) -> Optional[Game]:
        game = self._games.get(game_id)
        if game is None:
            return None
        game = _updated(game, updates)
        if game.team1_id == game.team2_id:
            raise SelfPlayError(game.team1_id)
        if 'league_id' in updates:
            self._require_league(game.league_id)
        for key in ('team1_id', 'team2_id'):
            if key in updates:
                self._require_team(getattr(game, key))
        self._games[game_id] = game
        self._commit()
        return game

    def _delete_game(self, game_id: str) -> bool:
        self._delete_scores_by_game(game_id)
        return self._games.pop(game_id, None) is not None

    def delete_game(self, game_id: str) -> bool:
        deleted = self._delete_game(game_id)
        if deleted:
            self._commit()
        return deleted

    # Scores

    def get_scores(self, game_id: Optional[str] = None) -> list[Score]:
        scores = list(self._scores.values())
        if game_id:
            scores = [s for s in scores if s.game_id == game_id]
        return scores

    def get_scores_by_bowler(self, bowler_id: str) -> list[Score]:
        return [s for s in self._scores.values() if s.bowler_id == bowler_id]

    def create_score(self, game_id: str, entry: ScoreEntry | dict) -> Score:
        if game_id not in self._games:
            raise GameNotFoundError(game_id)
        payload = ScoreEntry.model_validate(entry)
        score = Score(**payload.model_dump(), id=_new_id(), game_id=game_id)
        self._scores[score.id] = score
        self._commit()
        return score

    def delete_score(self, score_id: str) -> bool:
        deleted = self._scores.pop(score_id, None) is not None
        if deleted:
            self._commit()
        return deleted

    def _delete_scores_by_game(self, game_id: str) -> None:
        self._scores = {k: s for k, s in self._scores.items() if s.game_id != game_id}

    def delete_scores_by_game(self, game_id: str) -> bool:
        self._delete_scores_by_game(game_id)
        self._commit()
        return True

    def replace_game_scores(
        self, game_id: str, entries: Iterable[ScoreEntry | dict]
    ) -> list[Score]:
        """
        Replace every score of a game and mark it completed.

        The new score table is built aside and swapped in with the game
        update, so no reader sees a game whose scores are half replaced.

        Raises:
            GameNotFoundError: If the game doesn't exist
        """
        game = self._games.get(game_id)
        if game is None:
            raise GameNotFoundError(game_id)

        new_scores = [
            Score(**ScoreEntry.model_validate(e).model_dump(), id=_new_id(), game_id=game_id)
            for e in entries
        ]
        table = {k: s for k, s in self._scores.items() if s.game_id != game_id}
        table.update((s.id, s) for s in new_scores)

        self._scores = table
        self._games[game_id] = _updated(game, {'completed': True})
        logger.info(f'Saved {len(new_scores)} scores for game {game_id} (week {game.week})')
        self._commit()
        return new_scores


class JsonRepository(InMemoryRepository):
    """
    Repository persisted to a single JSON document.

    The file is read once on construction (a missing file starts an empty
    store) and rewritten after every mutation.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        data = None
        if self.path.exists():
            data = load_json(self.path, schema=LeagueDataFile)
            logger.debug(f'Loaded {len(data.leagues)} leagues from {self.path}')
        super().__init__(data)

    def _commit(self) -> None:
        save_json(self.path, self.to_data_file())
