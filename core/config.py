"""Configuration constants for the sight words practice engine."""

DEFAULT_DIFFICULTY = 'normal'

# Queue construction
PICK_QUEUE_SIZE = 10          # Unique words in the multiple-choice phase
SPELL_QUEUE_SIZE = 5          # Unique words in the spelling phase

# Replay of missed pick rounds
MAX_REPLAYS = 2               # Times a single round may be re-inserted
REPLAY_OFFSET = 3             # Resurfaces this many rounds later

# Pick grid
GRID_SIZE = 4                 # Cells in the grid, one of them blank
GRID_FILLED_SLOTS = 3         # Cells showing an option

# Round options
MIN_OPTIONS = 2
MAX_OPTIONS = 4

# Pause after an answer before moving on (seconds)
ADVANCE_DELAY_SECONDS = 0.7

# Progress dashboard
MISSED_WORDS_LIMIT = 5        # Most-missed words listed per sport
