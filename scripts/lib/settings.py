"""
Runtime settings for Studio Admin Hub, read from the environment.

Values come from the process environment, with a project-root .env loaded
first. Integer settings are validated at import so a bad value fails fast.

Usage:
    from scripts.lib import settings
    days = settings.DEFAULT_WINDOW_DAYS
"""
import os
from pathlib import Path

from dotenv import load_dotenv

from scripts.lib.errors import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(PROJECT_ROOT / ".env")


def _int_setting(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}", setting=name)
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}", setting=name)
    return value


# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY = (
    os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
    or os.getenv("SUPABASE_KEY", "")
)

# Server
DASHBOARD_PORT = _int_setting("DASHBOARD_PORT", 8001, minimum=1)
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS", "http://localhost:3000,http://localhost:8001"
).split(",")
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Analytics
DEFAULT_WINDOW_DAYS = _int_setting("DEFAULT_WINDOW_DAYS", 7, minimum=1)
MAX_WINDOW_DAYS = _int_setting("MAX_WINDOW_DAYS", 365, minimum=1)
TOP_PAGES_LIMIT = _int_setting("TOP_PAGES_LIMIT", 5, minimum=1)
TOP_SERVICES_LIMIT = _int_setting("TOP_SERVICES_LIMIT", 6, minimum=1)

# Content
WORDS_PER_MINUTE = _int_setting("WORDS_PER_MINUTE", 200, minimum=1)

# Exports
EXPORT_DIR = Path(os.getenv("EXPORT_DIR", str(PROJECT_ROOT / "data" / "exports")))
