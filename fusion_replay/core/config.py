import os

# ---- Recording layout ----
INDEX_FILENAME = "index.json"

TAG_SUBDIR  = "uwb"
TAG_PREFIX  = "uwb_"
BEAM_SUBDIR = "mmwave"
BEAM_PREFIX = "mmwave_"
AUX_EXT     = ".csv"

# manifest stream keys
STREAM_COLOR = "color"
STREAM_DEPTH = "depth_color"
STREAM_LIDAR = "lidar_rev"

# ---- Time alignment ----
MATCH_TOLERANCE_MS = 200

# ---- Lidar (2D range scan) ----
LIDAR_ROTATION_DEG    = 90.0   # sensor forward -> world up
LIDAR_MIN_RANGE_M     = 0.01
LIDAR_VALID_THRESHOLD = 0.5
INTENSITY_SCALE       = 255.0
LIDAR_MAX_RANGE_M     = 12.0

# ---- UWB tag CSV columns ----
TAG_ID_COL     = 1
TAG_RANGE_COLS = (4, 5, 6, 7)
TAG_POS_COLS   = (9, 10, 11)

# ---- mmWave ----
BEAM_COUNT = 64

# ---- Playback ----
TICK_MS  = 33
AUTOTICK = os.environ.get("FUSION_REPLAY_AUTOTICK", "1") != "0"

# ---- View window (meters) ----
VIEW_WIDTH_M   = LIDAR_MAX_RANGE_M
VIEW_HEIGHT_M  = LIDAR_MAX_RANGE_M
VIEW_Y_MIN     = -2.0
VIEW_Y_MAX     = 10.0
VIEW_MARGIN_PX = 20
VIEW_TICKS     = 10

# UWB anchors (x, y, z in meters)
UWB_ANCHORS = [
    {"id": "A0", "x":  0.0, "y": 0.0, "z": 1.2, "active": True},
    {"id": "A1", "x":  1.4, "y": 9.6, "z": 1.6, "active": True},
    {"id": "A2", "x": -2.7, "y": 0.0, "z": 0.8, "active": True},
    {"id": "A3", "x": -2.7, "y": 4.5, "z": 0.0, "active": True},
]

# ---- Recordings on disk ----
DATA_DIR = os.path.abspath(
    os.environ.get("FUSION_REPLAY_DATA_DIR")
    or os.path.join(os.path.dirname(__file__), "..", "..", "public", "recordings")
)

# ---- Demo mode ----
DEMO_POINT_COUNT = 400
DEMO_SEED = None  # None -> fresh entropy
