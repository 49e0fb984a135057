# Number of distinct symbols the artwork provides; symbol ids live in [0, AVAILABLE_SYMBOLS).
AVAILABLE_SYMBOLS = 36

# Default board used when no level database entry is supplied.
DEFAULT_BOARD_WIDTH = 8
DEFAULT_BOARD_HEIGHT = 6
DEFAULT_SYMBOL_COUNT = 12

# Phase timings in seconds.
# Time the connector stays visible before the matched pair disappears.
CLEAR_DELAY = 0.3
# Settle time between staged shift passes and before the solvability check.
SHIFT_TIME = 0.2
# Input lock while reshuffled tiles travel to their new cells.
SHUFFLE_TIME = 0.3

# Random permutations tried by a reshuffle before forcing a linkable pair.
MAX_SHUFFLE_ATTEMPTS = 200
