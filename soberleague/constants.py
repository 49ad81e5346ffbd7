"""Constants for the Sober League scheduler and scorer."""

# Placeholder appended to odd rosters; never appears in a fixture
BYE = 'BYE'

# Length of a fixture window
WEEK_LENGTH_DAYS = 7

# League points per result
WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0

# Winner codes stored on a fixture (None means undecided)
WINNER_PLAYER1 = 'player1'
WINNER_PLAYER2 = 'player2'
WINNER_DRAW = 'draw'

# Name of the bonus entry in the substance catalog
CLEAN_SHEET = 'Clean sheet'
DEFAULT_CLEAN_SHEET_BONUS = -1

# Base points per logged substance. Positive entries count as harmful use.
DEFAULT_SUBSTANCE_POINTS = {
    'Snus': 1,
    'Sigaretta': 2,
    'Cannabis': 3,
    'Cerotto alla nicotina': 1,
    'Birra 3dl': 1,
    'Birra 5dl': 2,
    'Birra analcolica': 0,
    'Bicchiere di vino': 2,
    'Cocktail': 3,
    'Shot': 3,
    'Fast food': 1,
    'LSD': 5,
    'Droghe pesanti': 10,
    CLEAN_SHEET: DEFAULT_CLEAN_SHEET_BONUS,
}
