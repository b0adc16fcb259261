from fractions import Fraction
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"

DEFAULT_BEST_OF = 3
BEST_OF_VALUES = (3, 5)

# Point levels of a single game, in order.
GAME_POINTS = (0, 15, 30, 40)
SET_GAMES = 6
LONG_SET_TIE_BREAK_GAMES = 12
TIE_BREAK_POINTS = 7

# Outcome probability model
DEFAULT_HOLD_RATE = 0.6
DEFAULT_TIE_BREAK_RATE = 0.5
SLICE_WEIGHTS = {
    "level": Fraction(3, 4),
    "round": Fraction(3, 4),
    "best_of": Fraction(2, 3),
    "year": Fraction(4, 3),
    "opponent": Fraction(3, 2),
    "surface": Fraction(4, 3),
}
# Simulated rates stay strictly inside (0, 1) so every match terminates.
RATE_BOUNDS = (0.01, 0.99)

# Draw generation
MIN_DRAW_SIZE = 8
MAX_DRAW_SIZE = 128
MAX_SEED_RATE = Fraction(1, 2)

MAX_ARCHIVE_SETS = 5