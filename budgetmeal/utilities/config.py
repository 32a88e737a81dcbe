"""Configuration management for the Budget Meal Planner."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# External scoring (text generation)
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL: Final[str] = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
OPENAI_TIMEOUT: Final[float] = float(os.getenv('OPENAI_TIMEOUT', '30'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Selection tuning
BUDGET_TOLERANCE: Final[float] = float(os.getenv('BUDGET_TOLERANCE', '1.10'))
VARIETY_WINDOW: Final[int] = int(os.getenv('VARIETY_WINDOW', '5'))
SHORTLIST_SIZE: Final[int] = int(os.getenv('SHORTLIST_SIZE', '10'))

# Price tiers (upper bounds, exclusive) in ETB per day
TIER_THRESHOLDS: Final[dict[str, float]] = {
    "Small": float(os.getenv('TIER_SMALL_MAX', '150')),
    "Medium": float(os.getenv('TIER_MEDIUM_MAX', '300')),
}

# Analysis
LOW_COST_THRESHOLD: Final[float] = float(os.getenv('LOW_COST_THRESHOLD', '500'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('DATA_DIR', str(BASE_DIR / 'data')))
