"""Configuration management for the Meal Plan service."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Recipe catalog (Spoonacular)
SPOONACULAR_API_KEY: Final[str] = os.getenv('SPOONACULAR_API_KEY', '')
SPOONACULAR_BASE_URL: Final[str] = os.getenv('SPOONACULAR_BASE_URL', 'https://api.spoonacular.com')
CATALOG_TIMEOUT: Final[float] = float(os.getenv('CATALOG_TIMEOUT', '15'))
CATALOG_CACHE_TTL: Final[int] = int(os.getenv('CATALOG_CACHE_TTL', str(60 * 60)))  # seconds
# Pause between successive catalog queries of one planning request (rate limit)
CATALOG_REQUEST_DELAY: Final[float] = float(os.getenv('CATALOG_REQUEST_DELAY', '1.0'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
