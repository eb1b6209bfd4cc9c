"""Configuration for Lane Switch."""
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


INITIAL_LIVES = _get_int('LANE_SWITCH_LIVES', 3)
INTRO_DELAY = _get_float('LANE_SWITCH_INTRO_DELAY', 1.0)

LANES = _get_int('LANE_SWITCH_LANES', 3)
START_LANE = _get_int('LANE_SWITCH_START_LANE', 1)
BLOCK_WIDTH = _get_float('LANE_SWITCH_BLOCK_WIDTH', 80)
BLOCK_HEIGHT = _get_float('LANE_SWITCH_BLOCK_HEIGHT', 30)
PLAYER_HEIGHT = _get_float('LANE_SWITCH_PLAYER_HEIGHT', 30)
PLAYER_BOTTOM_MARGIN = _get_float('LANE_SWITCH_PLAYER_BOTTOM_MARGIN', 10)
LANE_SWITCH_SPEED = _get_float('LANE_SWITCH_SPEED', 10)  # higher = snappier lane change

# Difficulty: speed and spawn rate x1.15 every 15s
INITIAL_SPEED = _get_float('LANE_SWITCH_INITIAL_SPEED', 300)
MAX_SPEED = _get_float('LANE_SWITCH_MAX_SPEED', 1200)
INITIAL_SPAWN_INTERVAL = _get_float('LANE_SWITCH_INITIAL_SPAWN_INTERVAL', 0.8)
MIN_SPAWN_INTERVAL = _get_float('LANE_SWITCH_MIN_SPAWN_INTERVAL', 0.2)
SPEED_FACTOR = _get_float('LANE_SWITCH_SPEED_FACTOR', 1.15)
STEP_SECONDS = _get_float('LANE_SWITCH_STEP_SECONDS', 15)

HIT_FLASH = _get_float('LANE_SWITCH_HIT_FLASH', 0.2)
