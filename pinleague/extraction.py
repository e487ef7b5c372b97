"""Merging photo-extracted rosters and score sheets into league data.

The extraction service itself (an image model) lives outside this package;
these helpers take its JSON output, match names against known bowlers, and
fold the numbers into a score sheet grid for the organizer to review.
"""

import logging
from typing import Any, Optional

from .constants import CONFIDENCE_LABELS
from .schemas import Bowler, BowlerCreate, RosterExtraction, ScoreExtraction

logger = logging.getLogger('pinleague.extraction')


def parse_roster_extraction(data: dict[str, Any]) -> RosterExtraction:
    """Validate raw roster extraction output (a missing bowler list is empty)."""
    return RosterExtraction.model_validate(
        {'bowlers': data.get('bowlers') or [], 'teamName': data.get('teamName', data.get('team_name'))}
    )


def parse_score_extraction(data: dict[str, Any]) -> ScoreExtraction:
    """Validate raw score sheet extraction output (a missing score list is empty)."""
    return ScoreExtraction.model_validate({'scores': data.get('scores') or []})


def confidence_label(confidence: str) -> str:
    """Review label for an extraction confidence level."""
    return CONFIDENCE_LABELS.get(confidence, 'Verify')


def match_bowler(name: str, bowlers: list[Bowler]) -> Optional[Bowler]:
    """
    Find the bowler an extracted name refers to.

    A bowler matches when either name contains the other, ignoring case.
    The first match in list order wins.

    Examples:
        "Smith" matches "John Smith"
        "John Smith Jr" matches "John Smith"
    """
    needle = name.strip().lower()
    if not needle:
        return None

    for bowler in bowlers:
        candidate = bowler.name.lower()
        if needle in candidate or candidate in needle:
            return bowler
    return None


def merge_extracted_scores(
    extraction: ScoreExtraction,
    team1_bowlers: list[Bowler],
    team2_bowlers: list[Bowler],
    grid: dict[str, list[int]],
    games_per_session: int,
) -> tuple[dict[str, list[int]], list[str]]:
    """
    Fold extracted scores into a score sheet grid.

    Team 1 bowlers are matched before team 2. Each game read from the photo
    overwrites that cell; games the photo didn't show keep their value.
    Matched rows come back with exactly games_per_session cells, and games
    read beyond the session length are logged and left out.

    Args:
        extraction: Validated score sheet extraction
        team1_bowlers: Bowlers of the game's first team
        team2_bowlers: Bowlers of the game's second team
        grid: Bowler id -> pins per game, as currently entered
        games_per_session: Number of games per session

    Returns:
        Tuple of (merged_grid, unmatched_names)
    """
    merged = {bowler_id: list(games) for bowler_id, games in grid.items()}
    unmatched = []

    for extracted in extraction.scores:
        bowler = match_bowler(extracted.bowler_name, team1_bowlers) or match_bowler(
            extracted.bowler_name, team2_bowlers
        )
        if bowler is None:
            unmatched.append(extracted.bowler_name)
            continue

        if extracted.confidence != 'high':
            logger.info(
                f'{bowler.name}: scores read with {extracted.confidence} confidence '
                f'({confidence_label(extracted.confidence)})'
            )

        existing = list(merged.get(bowler.id) or [])[:games_per_session]
        existing += [0] * (games_per_session - len(existing))
        read = extracted.games
        merged[bowler.id] = [
            read[i] if i < len(read) and read[i] is not None else pins
            for i, pins in enumerate(existing)
        ]

        dropped = [
            f'game {i + 1} ({pins})'
            for i, pins in enumerate(read)
            if i >= games_per_session and pins is not None
        ]
        if dropped:
            logger.warning(
                f'{bowler.name}: ignoring {", ".join(dropped)} read from the sheet; '
                f'league bowls {games_per_session} games per session'
            )

    if unmatched:
        logger.warning(f'No bowler matched: {", ".join(unmatched)}')

    return merged, unmatched


def roster_to_bowlers(
    extraction: RosterExtraction, team_id: str, league_id: str
) -> list[BowlerCreate]:
    """Turn an extracted roster into bowler creation payloads."""
    bowlers = []
    for extracted in extraction.bowlers:
        if extracted.confidence == 'low':
            logger.warning(
                f'Verify {extracted.name}: average {extracted.starting_average:g} read with low confidence'
            )
        bowlers.append(
            BowlerCreate(
                team_id=team_id,
                league_id=league_id,
                name=extracted.name,
                starting_average=extracted.starting_average,
            )
        )
    return bowlers
