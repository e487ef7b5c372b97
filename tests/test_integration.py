"""Integration tests for end-to-end workflows."""

import json
import logging

import openpyxl
import pytest
from pydantic import ValidationError

import league_cli
from pinleague import config
from pinleague.logging_config import get_logger, setup_logging
from pinleague.repository import JsonRepository
from pinleague.schemas import AppConfig
from pinleague.standings import get_team_standings


@pytest.fixture
def data_file(tmp_path):
    """JSON store with a two-team league and one scheduled game."""
    path = tmp_path / 'data' / 'league_data.json'
    repo = JsonRepository(path)
    league = repo.create_league(
        {
            'name': 'Wednesday Classic',
            'team_size': 2,
            'games_per_session': 3,
            'total_weeks': 10,
            'handicap_basis': 200,
            'handicap_percentage': 80,
            'max_handicap': 50,
        }
    )
    home = repo.create_team({'league_id': league.id, 'name': 'Kingpins'})
    away = repo.create_team({'league_id': league.id, 'name': 'Alley Oops'})
    roster = {}
    for team, names, averages in (
        (home, ['Ray Dunn', 'Kim Vo'], [190, 150]),
        (away, ['Lou Hart', 'Bea Lamb'], [175, 205]),
    ):
        roster[team.id] = [
            repo.create_bowler(
                {'team_id': team.id, 'league_id': league.id, 'name': n, 'starting_average': avg}
            )
            for n, avg in zip(names, averages)
        ]
    game = repo.create_game({'league_id': league.id, 'week': 1, 'team1_id': home.id, 'team2_id': away.id})
    return {
        'path': path,
        'league': league,
        'home': home,
        'away': away,
        'roster': roster,
        'game': game,
    }


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove the handlers the CLI installs."""
    yield
    logging.getLogger('pinleague').handlers = []


def write_scores(tmp_path, rows, name='scores.json'):
    path = tmp_path / name
    path.write_text(json.dumps({'scores': rows}))
    return path


def sheet_rows(store):
    """Score rows for a full three game session, home team winning every game."""
    rows = []
    for team, pins in ((store['home'], [210, 180]), (store['away'], [170, 160])):
        for bowler, score in zip(store['roster'][team.id], pins):
            for game_number in (1, 2, 3):
                rows.append(
                    {'bowler_id': bowler.id, 'team_id': team.id, 'game_number': game_number, 'score': score}
                )
    return rows


def run(store, *args):
    return league_cli.main(['--data-file', str(store['path']), *args])


class TestSeasonWorkflow:
    """Tests for recording a week and reading standings back through the CLI."""

    def test_save_scores_then_standings(self, data_file, tmp_path, capsys):
        """Test scores saved from a file show up in the printed standings."""
        scores = write_scores(tmp_path, sheet_rows(data_file))

        assert run(data_file, 'save-scores', data_file['game'].id, '--scores', str(scores)) == 0
        assert 'Saved 12 scores' in capsys.readouterr().out

        assert run(data_file, 'standings', data_file['league'].id) == 0
        out = capsys.readouterr().out
        assert 'Wednesday Classic (through week 1)' in out
        assert out.index('Kingpins') < out.index('Alley Oops')
        assert '1-0-0' in out

        repo = JsonRepository(data_file['path'])
        standings = get_team_standings(repo, data_file['league'].id)
        # two individual points and the team game each game, plus the series
        assert standings[0].points == 3 * 3 + 2
        assert standings[0].scratch_total == 1170

    def test_rejected_scores_leave_store_unchanged(self, data_file, tmp_path, capsys):
        """Test a bad batch exits 1 and writes nothing."""
        home_bowler = data_file['roster'][data_file['home'].id][0]
        rows = [
            {'bowler_id': home_bowler.id, 'team_id': data_file['away'].id, 'game_number': 1, 'score': 200}
        ]
        scores = write_scores(tmp_path, rows)

        assert run(data_file, 'save-scores', data_file['game'].id, '--scores', str(scores)) == 1
        assert '❌ Score submission rejected' in capsys.readouterr().out

        repo = JsonRepository(data_file['path'])
        assert repo.get_scores() == []
        assert repo.get_game(data_file['game'].id).completed is False

    def test_unknown_game(self, data_file, tmp_path, capsys):
        """Test saving to a missing game exits 1."""
        scores = write_scores(tmp_path, [])

        assert run(data_file, 'save-scores', 'no-such-game', '--scores', str(scores)) == 1
        assert 'Game no-such-game not found' in capsys.readouterr().out

    def test_score_out_of_range(self, data_file, tmp_path, capsys):
        """Test a 301 game exits 1 with the offending field and writes nothing."""
        rows = sheet_rows(data_file)
        rows[0]['score'] = 301
        scores = write_scores(tmp_path, rows)

        assert run(data_file, 'save-scores', data_file['game'].id, '--scores', str(scores)) == 1
        out = capsys.readouterr().out
        assert '❌ Invalid score rows' in out
        assert 'score:' in out

        repo = JsonRepository(data_file['path'])
        assert repo.get_scores() == []
        assert repo.get_game(data_file['game'].id).completed is False

    def test_missing_scores_file(self, data_file, tmp_path, capsys):
        """Test a scores file that doesn't exist exits 1."""
        missing = tmp_path / 'lane_7.json'

        assert run(data_file, 'save-scores', data_file['game'].id, '--scores', str(missing)) == 1
        assert '❌ Could not read scores: File not found' in capsys.readouterr().out

    def test_malformed_scores_file(self, data_file, tmp_path, capsys):
        """Test a scores file that isn't JSON exits 1."""
        scores = tmp_path / 'scores.json'
        scores.write_text('{"scores": [')

        assert run(data_file, 'save-scores', data_file['game'].id, '--scores', str(scores)) == 1
        assert '❌ Could not read scores: Invalid JSON' in capsys.readouterr().out

    def test_bowlers(self, data_file, tmp_path, capsys):
        """Test the individual listing ranks bowlers by average."""
        scores = write_scores(tmp_path, sheet_rows(data_file))
        run(data_file, 'save-scores', data_file['game'].id, '--scores', str(scores))
        capsys.readouterr()

        assert run(data_file, 'bowlers', data_file['league'].id) == 0
        out = capsys.readouterr().out
        assert out.index('Ray Dunn') < out.index('Kim Vo') < out.index('Lou Hart') < out.index('Bea Lamb')

    def test_export(self, data_file, tmp_path, capsys):
        """Test the export command writes a workbook with every team."""
        output = tmp_path / 'standings.xlsx'

        assert run(data_file, 'export', data_file['league'].id, '--output', str(output)) == 0

        wb = openpyxl.load_workbook(output)
        names = {row[1] for row in wb['Team Standings'].iter_rows(min_row=3, values_only=True)}
        assert names == {'Kingpins', 'Alley Oops'}

    def test_finalize(self, data_file, capsys):
        """Test finalizing prints final standings and persists the status."""
        assert run(data_file, 'finalize', data_file['league'].id) == 0
        assert 'FINAL STANDINGS' in capsys.readouterr().out

        repo = JsonRepository(data_file['path'])
        assert repo.get_league(data_file['league'].id).status == 'completed'

    @pytest.mark.parametrize('command', ['standings', 'bowlers', 'export', 'finalize'])
    def test_unknown_league(self, data_file, capsys, command):
        """Test league commands exit 1 for a missing league."""
        assert run(data_file, command, 'no-such-league') == 1
        assert '❌ League not found: no-such-league' in capsys.readouterr().out


class TestLeagueSetup:
    """Tests for creating leagues and scheduling games from the CLI."""

    def test_new_league_uses_configured_defaults(self, tmp_path, capsys):
        """Test a new league takes the default_league settings plus overrides."""
        store = {'path': tmp_path / 'league_data.json'}

        assert run(store, 'new-league', 'Sunday Doubles', '--team-size', '2', '--no-handicap') == 0
        assert 'Created league Sunday Doubles' in capsys.readouterr().out

        league = JsonRepository(store['path']).get_leagues()[0]
        defaults = config.get_league_defaults()
        assert league.team_size == 2
        assert league.use_handicap is False
        assert league.games_per_session == defaults.games_per_session
        assert league.handicap_basis == defaults.handicap_basis
        assert league.point_system == defaults.point_system

    def test_schedule(self, data_file, capsys):
        """Test a scheduled game is stored for the week."""
        league, home, away = data_file['league'], data_file['home'], data_file['away']

        assert run(data_file, 'schedule', league.id, '2', away.id, home.id) == 0
        assert 'Scheduled week 2' in capsys.readouterr().out

        games = JsonRepository(data_file['path']).get_games(league.id)
        assert [(g.week, g.team1_id) for g in games] == [(1, home.id), (2, away.id)]

    def test_schedule_self_play(self, data_file, capsys):
        """Test a team can't be scheduled against itself."""
        league, home = data_file['league'], data_file['home']

        assert run(data_file, 'schedule', league.id, '2', home.id, home.id) == 1
        assert 'cannot play itself' in capsys.readouterr().out

    def test_schedule_team_from_other_league(self, data_file, capsys):
        """Test both teams must belong to the league."""
        league, home = data_file['league'], data_file['home']

        assert run(data_file, 'schedule', league.id, '2', home.id, 'stranger') == 1
        assert 'Team stranger is not in league' in capsys.readouterr().out


class TestConfig:
    """Tests for application configuration loading."""

    @pytest.fixture(autouse=True)
    def fresh_cache(self):
        config.clear_config_cache()
        yield
        config.clear_config_cache()

    def test_bundled_config(self):
        """Test the shipped configuration loads and validates."""
        cfg = config.get_config()

        assert cfg.data_file.endswith('.json')
        assert config.get_league_defaults().handicap_basis == 210
        assert config.get_league_defaults().point_system.type == 'matchup'

    def test_cached(self):
        """Test the configuration is loaded once."""
        assert config.get_config() is config.get_config()

    def test_custom_config_file(self, tmp_path, monkeypatch):
        """Test settings are read from the configured path."""
        path = tmp_path / 'league_config.json'
        path.write_text(
            json.dumps({'data_file': 'leagues/fall.json', 'log_dir': 'out', 'default_league': {'team_size': 5}})
        )
        monkeypatch.setattr(config, 'CONFIG_PATH', path)

        assert str(config.get_data_file()) == 'leagues/fall.json'
        assert str(config.get_log_dir()) == 'out'
        assert config.get_league_defaults().team_size == 5
        assert config.get_league_defaults().games_per_session == 3

    def test_data_file_must_be_json(self):
        """Test a non-JSON data file path is rejected."""
        with pytest.raises(ValidationError):
            AppConfig(data_file='league.csv')


class TestLogging:
    """Tests for logging setup."""

    @pytest.fixture(autouse=True)
    def fresh_cache(self):
        config.clear_config_cache()
        yield
        config.clear_config_cache()

    def test_log_file_receives_module_logs(self, tmp_path):
        """Test records from pinleague modules land in the command's log file."""
        logger = setup_logging('finalize', log_to_file=True, log_dir=tmp_path)
        get_logger('pinleague.standings').info('Finalized Wednesday Classic')
        for handler in logger.handlers:
            handler.close()

        log_files = list(tmp_path.glob('pinleague_finalize_*.log'))
        assert len(log_files) == 1
        assert 'pinleague.standings - INFO' in log_files[0].read_text()

    def test_log_file_defaults_to_configured_dir(self, tmp_path, monkeypatch):
        """Test the log file goes to the log_dir from the config file."""
        path = tmp_path / 'league_config.json'
        path.write_text(json.dumps({'log_dir': str(tmp_path / 'league_logs')}))
        monkeypatch.setattr(config, 'CONFIG_PATH', path)

        logger = setup_logging('save-scores', log_to_file=True)
        for handler in logger.handlers:
            handler.close()

        assert len(list((tmp_path / 'league_logs').glob('pinleague_save-scores_*.log'))) == 1

    def test_cli_log_file(self, data_file, tmp_path, monkeypatch):
        """Test --log-to-file writes the run's log under the configured log_dir."""
        path = tmp_path / 'league_config.json'
        path.write_text(json.dumps({'log_dir': str(tmp_path / 'league_logs')}))
        monkeypatch.setattr(config, 'CONFIG_PATH', path)
        scores = write_scores(tmp_path, sheet_rows(data_file))

        assert run(data_file, '--log-to-file', 'save-scores', data_file['game'].id, '--scores', str(scores)) == 0
        for handler in logging.getLogger('pinleague').handlers:
            handler.close()

        log_files = list((tmp_path / 'league_logs').glob('pinleague_save-scores_*.log'))
        assert len(log_files) == 1

    def test_console_shows_warnings_only(self, capsys):
        """Test info records stay off the console unless verbose."""
        setup_logging()
        get_logger('stats').info('Computed 4 teams')
        get_logger('stats').warning('Skipping self-play game g1')

        err = capsys.readouterr().err
        assert 'Computed 4 teams' not in err
        assert 'WARNING: Skipping self-play game g1' in err

    def test_verbose_console(self, capsys):
        """Test verbose setup shows debug records on the console."""
        logger = setup_logging(verbose=True)
        get_logger('repository').debug('Loaded 2 leagues')

        assert logger.level == logging.DEBUG
        assert 'DEBUG: Loaded 2 leagues' in capsys.readouterr().err

    def test_setup_replaces_handlers(self):
        """Test repeated setup doesn't stack console handlers."""
        setup_logging()
        logger = setup_logging(verbose=True)

        assert len(logger.handlers) == 1

    def test_get_logger_names(self):
        """Test short names are placed under the pinleague logger."""
        assert get_logger('cli').name == 'pinleague.cli'
        assert get_logger('pinleague.stats').name == 'pinleague.stats'
        assert get_logger().name == 'pinleague'
