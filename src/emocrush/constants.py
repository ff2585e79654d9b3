GRID_ROWS = 8
GRID_COLS = 8

# Default emoji palette. The engine treats entries as opaque type names.
EMOJI_PALETTE = ('😀', '😂', '😍', '🤔', '😎', '🥳', '😴', '🤯')

MIN_MATCH_LENGTH = 3
# Anti-match repair may exclude one horizontal and one vertical neighbour type.
MIN_PALETTE_SIZE = 3

MAX_CASCADE_ITERATIONS = 10
SHUFFLE_MAX_ATTEMPTS = 200

# Scoring
BASE_MATCH_SCORE = 100
COMBO_STEP_PERCENT = 10          # +10% per resolved cascade iteration
CASCADE_BONUS_PER_ITERATION = 500

# Session defaults
MAX_MOVES = 30
MAX_MOVES_CAP = 50
MOVES_PER_LEVEL = 2
TARGET_SCORE = 10000
