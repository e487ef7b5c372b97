"""Constants and limits for the league engine."""

# Pin counts
MIN_SCORE = 0
MAX_SCORE = 300

# Session and roster bounds
MAX_GAMES_PER_SESSION = 5
MAX_TEAM_SIZE = 10
MAX_WEEKS = 52

# Handicap bounds
MIN_HANDICAP_BASIS = 180
MAX_HANDICAP_BASIS = 250
MAX_HANDICAP_PERCENTAGE = 100
MAX_HANDICAP_CAP = 100

# A "series" for high-series purposes is the best three games
SERIES_LENGTH = 3

# Number of recent games shown on the league summary
RECENT_GAMES_LIMIT = 10

# Series outcomes
WIN = 'win'
LOSS = 'loss'
TIE = 'tie'

# Extraction confidence -> review label
CONFIDENCE_LABELS = {
    'high': 'Clear',
    'medium': 'Check',
    'low': 'Verify',
}
