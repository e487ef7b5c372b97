"""Excel export of league standings."""

import logging
from pathlib import Path

import openpyxl
from openpyxl.styles import Font

from .models import BowlerWithStats, StandingsEntry
from .schemas import League

logger = logging.getLogger('pinleague.export')

TEAM_HEADERS = ['Rank', 'Team', 'W-L-T', 'Points', 'Scratch', 'Handicap', 'Total']
BOWLER_HEADERS = ['Rank', 'Bowler', 'Games', 'Average', 'Handicap', 'High Game', 'High Series']


def team_standings_rows(league: League, standings: list[StandingsEntry]) -> list[list]:
    """Flatten team standings into table rows (handicap columns zero when unused)."""
    rows = []
    for entry in standings:
        handicap = entry.handicap_total if league.use_handicap else 0
        rows.append(
            [
                entry.rank,
                entry.team.name,
                entry.team.record,
                entry.points,
                entry.scratch_total,
                handicap,
                entry.scratch_total + handicap,
            ]
        )
    return rows


def individual_standings_rows(bowlers: list[BowlerWithStats]) -> list[list]:
    """Flatten individual standings into table rows; averages truncate like a score sheet."""
    return [
        [
            rank,
            b.name,
            b.games_played,
            int(b.average),
            b.handicap,
            b.high_game,
            b.high_series,
        ]
        for rank, b in enumerate(bowlers, 1)
    ]


def write_standings_workbook(
    path: str | Path,
    league: League,
    team_standings: list[StandingsEntry],
    individual_standings: list[BowlerWithStats],
) -> Path:
    """
    Write team and individual standings to an Excel workbook.

    Args:
        path: Output .xlsx path
        league: League the standings belong to
        team_standings: Ranked team standings
        individual_standings: Bowlers sorted by average

    Returns:
        Path the workbook was written to
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'Team Standings'
    ws.append([league.name])
    ws.cell(row=1, column=1).font = Font(bold=True)
    ws.append(TEAM_HEADERS)
    for row in team_standings_rows(league, team_standings):
        ws.append(row)

    ws = wb.create_sheet('Individual')
    ws.append([league.name])
    ws.cell(row=1, column=1).font = Font(bold=True)
    ws.append(BOWLER_HEADERS)
    for row in individual_standings_rows(individual_standings):
        ws.append(row)

    for sheet in wb.worksheets:
        for cell in sheet[2]:
            cell.font = Font(bold=True)

    wb.save(path)
    logger.info(f'Standings saved to {path}')
    return path
