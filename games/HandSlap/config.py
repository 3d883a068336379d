"""
HandSlap - Configuration loader.

Loads settings from .env file with sensible defaults.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

from models import Color, Resolution

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display
SCREEN = Resolution(
    width=_get_int('SCREEN_WIDTH', 1280),
    height=_get_int('SCREEN_HEIGHT', 720),
)
FULLSCREEN = _get_bool('FULLSCREEN', False)
FPS_CAP = _get_int('FPS_CAP', 0)  # 0 = run at host speed
BACKGROUND_COLOR = Color.parse(os.getenv('BACKGROUND_COLOR', '255,255,255'))
PROMPT_COLOR = Color.parse(os.getenv('PROMPT_COLOR', '40,40,40'))
START_PROMPT = os.getenv('START_PROMPT', 'Click to slap')

# Audio
AUDIO_ENABLED = _get_bool('AUDIO_ENABLED', True)
SLAP_SOUND = os.getenv('SLAP_SOUND', 'slap')  # sound name in the asset manifest
SOUND_VOLUME = _get_float('SOUND_VOLUME', 1.0)  # master volume, multiplies the manifest volume

# Assets
ASSETS_DIR = Path(os.getenv('ASSETS_DIR', str(Path(__file__).parent / 'assets')))
ASSET_TIMEOUT = _get_float('ASSET_TIMEOUT', 10.0)  # seconds per download
