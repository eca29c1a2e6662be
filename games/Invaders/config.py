"""
Invaders - Configuration loader.

Loads gameplay settings from .env file with sensible defaults. Presentation
(surface size, colors, geometry) is fixed by the element and not
configurable.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

from models import Color, InvadersConfig

# Load .env from game directory (real environment variables win)
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Playfield (fixed)
GAME_WIDTH = 600
GAME_HEIGHT = 400

# Movement (pixels per tick)
PLAYER_SPEED = _get_float('PLAYER_SPEED', 5)
BULLET_SPEED = _get_float('BULLET_SPEED', 7)
INVADER_SPEED_X = _get_float('INVADER_SPEED_X', 1)
INVADER_SPEED_Y = _get_float('INVADER_SPEED_Y', 15)

# Invader grid
INVADER_COLS = _get_int('INVADER_COLS', 10)
INVADER_ROWS = _get_int('INVADER_ROWS', 4)
INVADER_SIZE = 20
INVADER_PADDING = 10
INVADER_OFFSET_TOP = 40
INVADER_OFFSET_LEFT = 30

# Invader behavior
INVADER_FIRE_RATE = _get_float('INVADER_FIRE_RATE', 0.99)  # chance of *not* firing per tick
INVADER_MOVE_INTERVAL = _get_int('INVADER_MOVE_INTERVAL', 25)  # ticks between block steps

# Game rules
MAX_PLAYER_BULLETS = _get_int('MAX_PLAYER_BULLETS', 2)
STARTING_LIVES = _get_int('STARTING_LIVES', 3)
POINTS_PER_HIT = _get_int('POINTS_PER_HIT', 10)

# Player / bullet geometry
PLAYER_WIDTH = 30
PLAYER_HEIGHT = 10
PLAYER_OFFSET_BOTTOM = 30
PLAYER_BULLET_SIZE = (2, 6)
INVADER_BULLET_SIZE = (2, 8)

# Keyboard contract (DOM key codes)
LEFT_KEYS = ('ArrowLeft', 'KeyA')
RIGHT_KEYS = ('ArrowRight', 'KeyD')
FIRE_KEY = 'Space'
PAUSE_KEY = 'KeyP'
RESTART_KEY = 'Enter'

# Visual
BACKGROUND_COLOR = Color.from_hex('#000000')
PLAYER_COLOR = Color.from_hex('#00ff00')
PLAYER_BULLET_COLOR = Color.from_hex('#00ff00')
INVADER_BULLET_COLOR = Color.from_hex('#ff0000')
INVADER_COLORS = {
    'A': Color.from_hex('#ff00ff'),
    'B': Color.from_hex('#00ffff'),
}
INVADER_INSET_COLOR = Color.from_hex('#000000')
TEXT_COLOR = Color.from_hex('#ffffff')
FRAME_COLOR = Color.from_hex('#00ff00')


def load_config() -> InvadersConfig:
    """Snapshot the environment-backed settings as a validated config."""
    return InvadersConfig(
        player_speed=PLAYER_SPEED,
        bullet_speed=BULLET_SPEED,
        invader_speed_x=INVADER_SPEED_X,
        invader_speed_y=INVADER_SPEED_Y,
        invader_cols=INVADER_COLS,
        invader_rows=INVADER_ROWS,
        invader_fire_rate=INVADER_FIRE_RATE,
        invader_move_interval=INVADER_MOVE_INTERVAL,
        max_player_bullets=MAX_PLAYER_BULLETS,
        starting_lives=STARTING_LIVES,
        points_per_hit=POINTS_PER_HIT,
    )
