from functools import lru_cache

from supabase import create_client, Client
from app.core.config import settings
from app.core.logging import get_logger
from app.core.store import SupabaseStore

logger = get_logger(__name__)


def _get_environment_info() -> str:
    """Get human-readable environment information"""
    if "127.0.0.1" in settings.SUPABASE_URL or "localhost" in settings.SUPABASE_URL:
        return "LOCAL"
    elif "supabase.co" in settings.SUPABASE_URL:
        return "CLOUD"
    else:
        return "UNKNOWN"


@lru_cache
def get_supabase() -> Client:
    """Get Supabase client instance, created on first use"""
    logger.info(f"Initializing Supabase client for {_get_environment_info()} environment")
    logger.info(f"Supabase URL: {settings.SUPABASE_URL}")
    return create_client(settings.SUPABASE_URL, settings.supabase_key)


@lru_cache
def get_store() -> SupabaseStore:
    return SupabaseStore(get_supabase())


async def init_db():
    """Initialize database connection"""
    try:
        # Test connection by fetching a simple query
        await get_store().select(
            settings.ONBOARDING_CONFIG_TABLE, columns="id", limit=1
        )
        logger.info(f"Supabase connection established successfully ({_get_environment_info()} environment)")
    except Exception as e:
        logger.error(f"Supabase connection failed ({_get_environment_info()} environment): {e}")
        raise
