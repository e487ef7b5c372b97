"""Handicap calculation."""

import math

from .schemas import League


def calculate_handicap(average: float, league: League) -> int:
    """
    Calculate a bowler's per-game handicap.

    Scoring:
        - No handicap when the league does not use one
        - No handicap at or above the basis average
        - Otherwise floor((basis - average) * percentage / 100), capped at max_handicap

    Args:
        average: Bowler's average (derived or starting)
        league: League whose handicap settings apply

    Returns:
        Non-negative integer handicap
    """
    if not league.use_handicap:
        return 0

    diff = league.handicap_basis - average
    if diff <= 0:
        return 0

    handicap = math.floor(diff * league.handicap_percentage / 100)
    return min(handicap, league.max_handicap)


def handicap_breakdown(average: float, league: League) -> dict:
    """Describe how a handicap was reached, for display next to the number."""
    handicap = calculate_handicap(average, league)
    diff = league.handicap_basis - average
    raw = math.floor(diff * league.handicap_percentage / 100) if diff > 0 else 0
    return {
        'basis': league.handicap_basis,
        'average': average,
        'percentage': league.handicap_percentage,
        'raw': raw if league.use_handicap else 0,
        'handicap': handicap,
        'capped': league.use_handicap and raw > league.max_handicap,
    }
