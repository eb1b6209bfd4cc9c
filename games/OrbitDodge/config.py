"""Configuration for Orbit Dodge."""
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


INITIAL_LIVES = _get_int('ORBIT_DODGE_LIVES', 3)

# Geometry
ORBIT_RADIUS_FACTOR = _get_float('ORBIT_RADIUS_FACTOR', 0.25)  # of the smaller screen side
PLAYER_RADIUS = _get_float('ORBIT_PLAYER_RADIUS', 10)
OBSTACLE_SIZE = _get_float('ORBIT_OBSTACLE_SIZE', 60)
SPAWN_DISTANCE_FACTOR = _get_float('ORBIT_SPAWN_DISTANCE_FACTOR', 1 / 1.5)  # of the larger screen side

# Motion
PLAYER_ANGULAR_SPEED = _get_float('ORBIT_PLAYER_ANGULAR_SPEED', 2.0943951023931953)  # radians/second

# Difficulty
INITIAL_SPEED = _get_float('ORBIT_DODGE_INITIAL_SPEED', 100)
MAX_SPEED = _get_float('ORBIT_DODGE_MAX_SPEED', 400)
SPEED_INCREASE = _get_float('ORBIT_DODGE_SPEED_INCREASE', 5)
INITIAL_SPAWN_INTERVAL = _get_float('ORBIT_DODGE_INITIAL_SPAWN_INTERVAL', 1.5)
MIN_SPAWN_INTERVAL = _get_float('ORBIT_DODGE_MIN_SPAWN_INTERVAL', 0.3)
SPAWN_INTERVAL_DECREASE = _get_float('ORBIT_DODGE_SPAWN_INTERVAL_DECREASE', 0.02)

HIT_FLASH = _get_float('ORBIT_DODGE_HIT_FLASH', 0.2)
