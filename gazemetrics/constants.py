"""
Default values shared across the gaze metrics package.

Landmark indices refer to the MediaPipe Face Mesh topology with iris
refinement enabled (478 landmarks per face).
"""

# Eye landmark indices
LEFT_EYE_OUTER_CORNER = 33
LEFT_EYE_INNER_CORNER = 133
RIGHT_EYE_OUTER_CORNER = 362
RIGHT_EYE_INNER_CORNER = 263
LEFT_IRIS_CENTER = 468
RIGHT_IRIS_CENTER = 473

# Feature vector layout
FEATURE_LENGTH = 10
BASE_FEATURE_X = 6  # left iris x
BASE_FEATURE_Y = 7  # left iris y

# Calibration
DEFAULT_SAMPLES_PER_POINT = 30
DEFAULT_GRID_ROWS = 5
DEFAULT_GRID_COLS = 5
DEFAULT_MODEL_TYPE = "offset"

# Segmentation (screen units / milliseconds)
DEFAULT_FIXATION_RADIUS = 50.0
DEFAULT_FIXATION_DURATION_THRESHOLD = 100.0
DEFAULT_SACCADE_THRESHOLD = 30.0

# Screen
DEFAULT_SCREEN_WIDTH = 1920
DEFAULT_SCREEN_HEIGHT = 1080
