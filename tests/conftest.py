"""Shared fixtures: a small league in an in-memory repository."""

from types import SimpleNamespace

import pytest

from pinleague.repository import InMemoryRepository
from pinleague.submission import save_game_scores, scores_from_grid


LEAGUE_SETTINGS = {
    'name': 'Tuesday Night Mixed',
    'team_size': 2,
    'games_per_session': 3,
    'total_weeks': 30,
    'handicap_basis': 210,
    'handicap_percentage': 90,
    'max_handicap': 63,
    'use_handicap': True,
}


@pytest.fixture
def repo():
    """Empty in-memory repository."""
    return InMemoryRepository()


@pytest.fixture
def make_league(repo):
    """Factory for a league with two bowlers on each listed team."""

    def _make(team_names=('Gutter Gang', 'Pin Pals'), **overrides):
        settings = {**LEAGUE_SETTINGS, **overrides}
        league = repo.create_league(settings)
        teams = []
        bowlers = {}
        averages = iter([180, 200, 150, 220, 170, 190, 160, 210])
        for name in team_names:
            team = repo.create_team({'league_id': league.id, 'name': name})
            teams.append(team)
            for slot in (1, 2):
                bowler = repo.create_bowler(
                    {
                        'team_id': team.id,
                        'league_id': league.id,
                        'name': f'{name} Bowler {slot}',
                        'starting_average': next(averages),
                    }
                )
                bowlers.setdefault(team.id, []).append(bowler)
        return SimpleNamespace(repo=repo, league=league, teams=teams, bowlers=bowlers)

    return _make


@pytest.fixture
def bowl(repo):
    """Schedule a game and save per-bowler game scores for both sides."""

    def _bowl(league, team1, team2, team1_grid, team2_grid, week=1):
        game = repo.create_game(
            {'league_id': league.id, 'week': week, 'team1_id': team1.id, 'team2_id': team2.id}
        )
        entries = scores_from_grid(team1.id, team1_grid) + scores_from_grid(team2.id, team2_grid)
        save_game_scores(repo, game.id, entries)
        return repo.get_game(game.id)

    return _bowl
