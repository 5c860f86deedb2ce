"""Configuration management for the Lunch Planner application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()
CORS_ORIGIN: Final[str] = os.getenv('CORS_ORIGIN', '*')

# Storage: "json" (one file per collection under DATA_DIR) or "memory"
STORAGE_BACKEND: Final[str] = os.getenv('STORAGE_BACKEND', 'json').lower()

# Collection names
USERS_TABLE: Final[str] = os.getenv('USERS_TABLE', 'Lunchplanner-Users')
INGREDIENTS_TABLE: Final[str] = os.getenv('INGREDIENTS_TABLE', 'Lunchplanner-Ingredients')
MEALS_TABLE: Final[str] = os.getenv('MEALS_TABLE', 'Lunchplanner-Meals')
MEALPLANS_TABLE: Final[str] = os.getenv('MEALPLANS_TABLE', 'Lunchplanner-MealPlans')

# Password hashing
PASSWORD_HASH_ITERATIONS: Final[int] = int(os.getenv('PASSWORD_HASH_ITERATIONS', '260000'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('DATA_DIR', str(BASE_DIR / 'data')))
