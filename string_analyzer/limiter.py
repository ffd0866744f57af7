import logging

from slowapi import Limiter
from slowapi.util import get_remote_address

from string_analyzer.config import Settings, get_settings

logger = logging.getLogger("string_analyzer.limiter")


def create_limiter(settings: Settings | None = None) -> Limiter:
    settings = settings or get_settings()
    storage_uri = settings.redis_url or "memory://"
    try:
        return Limiter(
            key_func=get_remote_address,
            default_limits=[settings.rate_limit],
            storage_uri=storage_uri,
            enabled=settings.rate_limit_enabled,
        )
    except Exception:
        logger.exception("Failed to create slowapi Limiter")
        raise


limiter = create_limiter()
