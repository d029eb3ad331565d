GRID_COLS = 8
GRID_ROWS = 8

# Number of gem types in play by default; boards need at least three to be solvable.
DEFAULT_GEM_TYPE_COUNT = 5
MIN_GEM_TYPE_COUNT = 3

# Rows above the board that new gems spawn from before falling into place.
# None means "one board height above the target cell".
DEFAULT_SPAWN_HEIGHT = None
