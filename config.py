# config.py
import os

# Base folders
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
AUDIO_DIR = os.path.join(BASE_DIR, "audio")

# Dimensions of the window (portrait, phone-like)
WINDOW_WIDTH = 480
WINDOW_HEIGHT = 800

# Lanes
LANE_COUNT = 3
LANE_WIDTH = WINDOW_WIDTH / LANE_COUNT
START_LANE = 1

# Entities (pixels)
PLAYER_SIZE = 50
PLAYER_BOTTOM = WINDOW_HEIGHT * 0.2  # Distance from the bottom edge
OBSTACLE_SIZE = 50
OBSTACLE_POOL_SIZE = 6
HITBOX_PADDING = 5  # Shrinks the player's band on both edges

# Vertical actions (milliseconds / pixels)
JUMP_DURATION = 600
JUMP_HEIGHT = 90
SLIDE_DURATION = 600
SLIDE_SCALE = 0.5

# Swipe thresholds
SWIPE_THRESHOLD_X = 50
SWIPE_THRESHOLD_Y = 40

# Difficulty ramp
BASE_SPEED = 300.0  # px / second
MAX_SPEED = 700.0
BASE_SPAWN_INTERVAL = 1500.0  # ms
MIN_SPAWN_INTERVAL = 600.0
DIFFICULTY_RAMP_DURATION = 60000.0  # ms until max difficulty

# Score ticks once every SCORE_UNIT ms of game time
SCORE_UNIT = 100

# Obstacle kinds: weights for spawning and height scale for collision/rendering
OBSTACLE_WEIGHTS = {"normal": 0.5, "high": 0.25, "low": 0.25}
OBSTACLE_SCALES = {"normal": 1.0, "high": 1.5, "low": 0.6}

# Difficulty presets
DIFFICULTIES = {
    "Easy": {"base_speed": 240.0, "max_speed": 560.0, "base_interval": 1800.0, "min_interval": 800.0},
    "Normal": {"base_speed": BASE_SPEED, "max_speed": MAX_SPEED,
               "base_interval": BASE_SPAWN_INTERVAL, "min_interval": MIN_SPAWN_INTERVAL},
    "Hard": {"base_speed": 380.0, "max_speed": 900.0, "base_interval": 1200.0, "min_interval": 450.0},
}

# Rail dashes
RAIL_DASH_HEIGHT = 40
RAIL_DASH_GAP = 30

# Visual lane tween
LANE_TWEEN_DURATION = 0.15  # seconds


def asset_path(name: str) -> str:
    """path to an image next to the modules, ex: bg1.jpg."""
    return os.path.join(BASE_DIR, name)


def audio_path(name: str) -> str:
    """path to the audio/."""
    return os.path.join(AUDIO_DIR, name)


MUSIC_FILE = "background-music.mp3"
