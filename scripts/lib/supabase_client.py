"""
Supabase Client Helper for Studio Admin Hub.
Creates the shared backend client handed to repositories and routers.

Usage:
    from scripts.lib.supabase_client import get_client

    client = get_client()
    repo = AnalyticsRepository(client)
"""
from scripts.lib import settings
from scripts.lib.errors import ConfigError
from scripts.lib.logger import setup_logger

logger = setup_logger(__name__)

_client = None


def get_client():
    """Create and return a Supabase client (singleton)."""
    global _client
    if _client is not None:
        return _client

    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise ConfigError(
            "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in .env",
            setting="SUPABASE_URL",
        )

    from supabase import create_client
    _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    logger.info("Supabase client connected to %s", settings.SUPABASE_URL)
    return _client


def is_available() -> bool:
    """True when a client can be created with the current settings."""
    try:
        get_client()
        return True
    except Exception as e:
        logger.warning("Supabase not available: %s", e)
        return False
