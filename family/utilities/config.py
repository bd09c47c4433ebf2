"""Configuration management for the Family Dashboard application."""
import os
from typing import Final
from pathlib import Path

# Load environment variables from .env file if it exists
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Shared admin secret (demo only, not hashed)
ADMIN_PASSWORD: Final[str] = os.getenv('ADMIN_PASSWORD', 'admin123')

# Sessions
SESSION_TIMEOUT_MINUTES: Final[int] = int(os.getenv('SESSION_TIMEOUT_MINUTES', '30'))
SESSION_TIMEOUT_MS: Final[int] = SESSION_TIMEOUT_MINUTES * 60 * 1000

# Family members count as "Active" when they logged in within this many days
ACTIVE_WINDOW_DAYS: Final[int] = int(os.getenv('ACTIVE_WINDOW_DAYS', '7'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('FAMILY_DATA_DIR', str(BASE_DIR / 'data')))
STORE_FILE: Final[Path] = Path(os.getenv('FAMILY_STORE_FILE', str(DATA_DIR / 'store.json')))
