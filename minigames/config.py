"""
Core configuration loaded from the environment.

Values can be overridden in a `.env` file at the project root or through
regular environment variables. Games read their own tuning from their
own config modules; the values here are framework-wide defaults.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_env_path = Path(__file__).parent.parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 1280)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 720)

# Loop timing
MAX_FRAME_DT = _get_float('MAX_FRAME_DT', 0.1)  # seconds, caps a single step after tab-inactivity
TARGET_FPS = _get_int('TARGET_FPS', 60)

# Session
DEFAULT_INITIAL_LIVES = _get_int('DEFAULT_INITIAL_LIVES', 3)
DEFAULT_INTRO_DELAY = _get_float('DEFAULT_INTRO_DELAY', 2.0)  # seconds before INTRO -> PLAYING
GAME_OVER_REVEAL_DELAY = _get_float('GAME_OVER_REVEAL_DELAY', 1.0)  # seconds before overlay shows

# Player feedback
HIT_FLASH_DURATION = _get_float('HIT_FLASH_DURATION', 0.15)
INVINCIBLE_DURATION = _get_float('INVINCIBLE_DURATION', 0.0)

# Entities
CULL_MARGIN = _get_float('CULL_MARGIN', 50.0)  # pixels beyond playfield before removal

# Persistence
HIGH_SCORES_PATH = os.getenv(
    'HIGH_SCORES_PATH',
    str(Path.home() / '.local' / 'share' / 'minigames' / 'high_scores.json'),
)
