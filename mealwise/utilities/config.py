"""Configuration management for the Mealwise application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


# AI provider
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL: Final[str] = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
OPENAI_VISION_MODEL: Final[str] = os.getenv('OPENAI_VISION_MODEL', OPENAI_MODEL)
OPENAI_CHAT_MODEL: Final[str] = os.getenv('OPENAI_CHAT_MODEL', OPENAI_MODEL)
AI_TIMEOUT_SECONDS: Final[float] = float(os.getenv('AI_TIMEOUT_SECONDS', '30'))
AI_MAX_RETRIES: Final[int] = int(os.getenv('AI_MAX_RETRIES', '2'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Data store
SEED_DEMO_DATA: Final[bool] = _flag('SEED_DEMO_DATA', 'True')
RECOMMENDATION_LIMIT: Final[int] = int(os.getenv('RECOMMENDATION_LIMIT', '10'))

# Identity
ALLOW_DEFAULT_USER: Final[bool] = _flag('ALLOW_DEFAULT_USER', 'True')
SESSION_COOKIE_NAME: Final[str] = os.getenv('SESSION_COOKIE_NAME', 'mealwise_session')
SESSION_TTL_SECONDS: Final[int] = int(os.getenv('SESSION_TTL_SECONDS', str(7 * 24 * 3600)))

# Uploads
MAX_UPLOAD_BYTES: Final[int] = int(os.getenv('MAX_UPLOAD_BYTES', str(10 * 1024 * 1024)))

# Pantry Alerts Configuration
DAYS_BEFORE_EXPIRY: Final[int] = int(os.getenv('DAYS_BEFORE_EXPIRY', '3'))
