"""Configuration for Gap Hop."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


INITIAL_LIVES = _get_int('GAP_HOP_LIVES', 3)
INTRO_DELAY = _get_float('GAP_HOP_INTRO_DELAY', 1.0)

# Physics (pixels, seconds)
GRAVITY = _get_float('GAP_HOP_GRAVITY', 1500)
JUMP_VELOCITY = _get_float('GAP_HOP_JUMP_VELOCITY', -600)
PLAYER_X = _get_float('GAP_HOP_PLAYER_X', 100)
PLAYER_RADIUS = _get_float('GAP_HOP_PLAYER_RADIUS', 20)
SPIKE_WIDTH = _get_float('GAP_HOP_SPIKE_WIDTH', 20)
SPIKE_MIN_HEIGHT = _get_float('GAP_HOP_SPIKE_MIN_HEIGHT', 30)
SPIKE_MAX_HEIGHT = _get_float('GAP_HOP_SPIKE_MAX_HEIGHT', 60)

# Difficulty: speed x1.1 every 15s, spawn interval x0.9 every 10s
BASE_SPEED = _get_float('GAP_HOP_BASE_SPEED', 300)
MAX_SPEED = _get_float('GAP_HOP_MAX_SPEED', 900)
SPEED_FACTOR = _get_float('GAP_HOP_SPEED_FACTOR', 1.1)
SPEED_STEP_SECONDS = _get_float('GAP_HOP_SPEED_STEP_SECONDS', 15)
INITIAL_SPAWN_INTERVAL = _get_float('GAP_HOP_INITIAL_SPAWN_INTERVAL', 1.2)
MIN_SPAWN_INTERVAL = _get_float('GAP_HOP_MIN_SPAWN_INTERVAL', 0.4)
SPAWN_FACTOR = _get_float('GAP_HOP_SPAWN_FACTOR', 0.9)
SPAWN_STEP_SECONDS = _get_float('GAP_HOP_SPAWN_STEP_SECONDS', 10)

# Feedback
HIT_FLASH = _get_float('GAP_HOP_HIT_FLASH', 0.2)
INVINCIBLE_DURATION = _get_float('GAP_HOP_INVINCIBLE_DURATION', 2.0)
