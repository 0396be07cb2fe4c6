GRID_WIDTH = 10
GRID_HEIGHT = 17

# Gravity is counted in frames: a piece falls one row every ``speed`` frames.
INITIAL_SPEED = 60
MIN_SPEED = 5
SPEED_STEP_PER_LEVEL = 6
SOFT_DROP_MULTIPLIER = 4

# Horizontal auto-shift, in frames.
DAS_INITIAL_FRAMES = 10
DAS_REPEAT_FRAMES = 4

QUEUE_DEPTH = 3
SPECIAL_PIECE_PROBABILITY = 0.2

LINE_CLEAR_POINTS = {1: 100, 2: 300, 3: 500, 4: 800}
LINE_CLEAR_POINTS_MAX = 1200  # five or more rows in one lock
SPECIAL_LINE_BONUS = 200
LOCK_POINTS = 10
SPECIAL_LOCK_BONUS = 100

LEVEL_TIME_LIMIT_SECONDS = 122
# A level only counts as survived when the board is less full than this.
BOARD_FULL_THRESHOLD = 0.99
LEVEL_BANNER_SECONDS = 2.0
BGM_TRACK_COUNT = 6

SPLASH_SECONDS = 1.0

MAX_HIGH_SCORES = 10
MAX_NAME_LENGTH = 12
HIGH_SCORE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Window geometry (pixels)
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
CELL_SIZE = 30
BOARD_TOP_MARGIN = 50
UPDATE_RATE = 1 / 60

# Ambient particle field
MAX_PARTICLES = 100
PARTICLE_SPAWN_INTERVAL = 0.05
PARTICLE_DECAY_PER_FRAME = 0.01
