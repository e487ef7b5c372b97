#!/usr/bin/env python3
"""
Bowling league standings CLI

Reads league data from the JSON store (data/league_data.json by default)
and prints standings, records scores, and exports workbooks.

Usage:
    python league_cli.py standings LEAGUE_ID
    python league_cli.py bowlers LEAGUE_ID
    python league_cli.py new-league "Tuesday Night Mixed" --team-size 4
    python league_cli.py schedule LEAGUE_ID 3 TEAM1_ID TEAM2_ID
    python league_cli.py save-scores GAME_ID --scores week_3_lane_7.json
    python league_cli.py export LEAGUE_ID --output standings.xlsx
    python league_cli.py finalize LEAGUE_ID
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from pinleague import (
    JsonRepository,
    NotFoundError,
    ScoreSubmissionError,
    SelfPlayError,
    finalize_league,
    get_individual_standings,
    get_team_standings,
    get_weeks_completed,
    save_game_scores,
    write_standings_workbook,
)
from pinleague.config import get_data_file, get_league_defaults
from pinleague.export import individual_standings_rows, team_standings_rows
from pinleague.logging_config import get_logger, setup_logging
from pinleague.utils import load_json

logger = get_logger('cli')


def print_team_standings(repo: JsonRepository, league_id: str) -> int:
    league = repo.get_league(league_id)
    if league is None:
        print(f'❌ League not found: {league_id}')
        return 1

    standings = get_team_standings(repo, league_id)
    print(f'\n{league.name} (through week {get_weeks_completed(repo, league_id)})')
    print('=' * 60)
    for rank, name, record, points, scratch, handicap, total in team_standings_rows(league, standings):
        line = f'  {rank:>2}. {name:<20} {record:<8} {points:>6g} pts  {scratch:>6} scratch'
        if league.use_handicap:
            line += f'  {handicap:>5} hdcp  {total:>6} total'
        print(line)
    return 0


def print_individual_standings(repo: JsonRepository, league_id: str) -> int:
    league = repo.get_league(league_id)
    if league is None:
        print(f'❌ League not found: {league_id}')
        return 1

    print(f'\n{league.name}: bowlers by average')
    print('=' * 60)
    for rank, name, games, average, handicap, high_game, high_series in individual_standings_rows(
        get_individual_standings(repo, league_id)
    ):
        print(
            f'  {rank:>2}. {name:<20} {average:>3} avg  {games:>3} gms  '
            f'+{handicap:<3} HG {high_game:<3}  HS {high_series}'
        )
    return 0


def create_league(repo: JsonRepository, args: argparse.Namespace) -> int:
    settings = get_league_defaults().model_dump()
    for key in ('team_size', 'games_per_session', 'total_weeks', 'handicap_basis',
                'handicap_percentage', 'max_handicap'):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    if args.no_handicap:
        settings['use_handicap'] = False

    league = repo.create_league({**settings, 'name': args.name})
    print(f'Created league {league.name}: {league.id}')
    return 0


def schedule_game(repo: JsonRepository, args: argparse.Namespace) -> int:
    if repo.get_league(args.league_id) is None:
        print(f'❌ League not found: {args.league_id}')
        return 1
    for team_id in (args.team1_id, args.team2_id):
        team = repo.get_team(team_id)
        if team is None or team.league_id != args.league_id:
            print(f'❌ Team {team_id} is not in league {args.league_id}')
            return 1

    try:
        game = repo.create_game(
            {
                'league_id': args.league_id,
                'week': args.week,
                'team1_id': args.team1_id,
                'team2_id': args.team2_id,
            }
        )
    except SelfPlayError as e:
        print(f'❌ {e}')
        return 1
    print(f'Scheduled week {game.week}: {game.id}')
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Bowling league standings and score entry')
    parser.add_argument(
        '--data-file', '-d',
        default=None,
        help='Path to the league data JSON file (defaults to the configured data_file)',
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log debug detail',
    )
    parser.add_argument(
        '--log-to-file',
        action='store_true',
        help='Also write a log file to the configured log directory',
    )
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('standings', help='Print team standings')
    p.add_argument('league_id')

    p = sub.add_parser('bowlers', help='Print individual standings')
    p.add_argument('league_id')

    p = sub.add_parser('new-league', help='Create a league from the configured defaults')
    p.add_argument('name')
    p.add_argument('--team-size', type=int)
    p.add_argument('--games-per-session', type=int)
    p.add_argument('--total-weeks', type=int)
    p.add_argument('--handicap-basis', type=int)
    p.add_argument('--handicap-percentage', type=float)
    p.add_argument('--max-handicap', type=int)
    p.add_argument('--no-handicap', action='store_true', help='Rank on scratch pins only')

    p = sub.add_parser('schedule', help='Schedule a game between two teams')
    p.add_argument('league_id')
    p.add_argument('week', type=int)
    p.add_argument('team1_id')
    p.add_argument('team2_id')

    p = sub.add_parser('save-scores', help='Replace a game\'s scores from a JSON file')
    p.add_argument('game_id')
    p.add_argument('--scores', '-s', required=True, help='JSON file with a "scores" list')

    p = sub.add_parser('export', help='Write standings to an Excel workbook')
    p.add_argument('league_id')
    p.add_argument('--output', '-o', default=None, help='Output .xlsx path')

    p = sub.add_parser('finalize', help='Mark a league completed and print final standings')
    p.add_argument('league_id')

    args = parser.parse_args(argv)

    setup_logging(args.command, verbose=args.verbose, log_to_file=args.log_to_file)
    logger.debug(f'Running {args.command}')

    data_file = Path(args.data_file) if args.data_file else get_data_file()
    repo = JsonRepository(data_file)

    if args.command == 'standings':
        return print_team_standings(repo, args.league_id)

    if args.command == 'bowlers':
        return print_individual_standings(repo, args.league_id)

    if args.command == 'new-league':
        return create_league(repo, args)

    if args.command == 'schedule':
        return schedule_game(repo, args)

    if args.command == 'save-scores':
        try:
            payload = load_json(args.scores)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            print(f'❌ Could not read scores: {e}')
            return 1
        entries = payload.get('scores', []) if isinstance(payload, dict) else payload
        try:
            saved = save_game_scores(repo, args.game_id, entries)
        except (NotFoundError, ScoreSubmissionError) as e:
            print(f'❌ {e}')
            return 1
        except ValidationError as e:
            logger.error(f'Invalid score rows in {args.scores}: {e}')
            print(f'❌ Invalid score rows in {args.scores}:')
            for error in e.errors():
                location = '.'.join(str(part) for part in error['loc'])
                print(f'   - {location}: {error["msg"]}')
            return 1
        print(f'Saved {len(saved)} scores for game {args.game_id}')
        return 0

    if args.command == 'export':
        league = repo.get_league(args.league_id)
        if league is None:
            print(f'❌ League not found: {args.league_id}')
            return 1
        output = Path(args.output) if args.output else data_file.parent / f'standings_{league.id}.xlsx'
        write_standings_workbook(
            output,
            league,
            get_team_standings(repo, league.id),
            get_individual_standings(repo, league.id),
        )
        print(f'Standings saved to {output}')
        return 0

    if args.command == 'finalize':
        if finalize_league(repo, args.league_id) is None:
            print(f'❌ League not found: {args.league_id}')
            return 1
        print('FINAL STANDINGS')
        return print_team_standings(repo, args.league_id)

    return 1


if __name__ == '__main__':
    sys.exit(main())
