"""Configuration for Core Protector."""
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


INITIAL_LIVES = _get_int('CORE_PROTECTOR_LIVES', 3)
INTRO_DELAY = _get_float('CORE_PROTECTOR_INTRO_DELAY', 1.5)

# Geometry (pixels)
CORE_RADIUS = _get_float('CORE_RADIUS', 25)
SHIELD_RADIUS = _get_float('SHIELD_RADIUS', 50)
SHIELD_ARC = _get_float('SHIELD_ARC', 1.0471975511965976)  # radians (60 degrees)
SHIELD_THICKNESS = _get_float('SHIELD_THICKNESS', 6)
SHIELD_KEY_STEP = _get_float('SHIELD_KEY_STEP', 0.2617993877991494)  # radians per key press (15 degrees)
PROJECTILE_RADIUS = _get_float('PROJECTILE_RADIUS', 5)
SPAWN_OFFSET = _get_float('SPAWN_OFFSET', 50)  # beyond half the larger screen side

# Difficulty
INITIAL_SPEED = _get_float('CORE_PROTECTOR_INITIAL_SPEED', 100)   # pixels/second
MAX_SPEED = _get_float('CORE_PROTECTOR_MAX_SPEED', 400)
SPEED_INCREASE = _get_float('CORE_PROTECTOR_SPEED_INCREASE', 5)   # pixels/second per second
INITIAL_SPAWN_INTERVAL = _get_float('CORE_PROTECTOR_INITIAL_SPAWN_INTERVAL', 1.5)  # seconds
MIN_SPAWN_INTERVAL = _get_float('CORE_PROTECTOR_MIN_SPAWN_INTERVAL', 0.3)
SPAWN_INTERVAL_DECREASE = _get_float('CORE_PROTECTOR_SPAWN_INTERVAL_DECREASE', 0.02)  # seconds per second

# Feedback
HIT_FLASH = _get_float('CORE_PROTECTOR_HIT_FLASH', 0.15)

# Points per blocked projectile
BLOCK_POINTS = _get_int('CORE_PROTECTOR_BLOCK_POINTS', 1)
