from slowapi import Limiter
from slowapi.util import get_remote_address
from projtrackr.config.settings import settings


def default_rate_limit() -> str:
    """Resolved per request so RATE_LIMIT changes take effect without rebuilding the limiter"""
    return settings.rate_limit


# default_limits apply to every route through SlowAPIMiddleware (see main.py);
# signup and login carry their own stricter limit
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[default_rate_limit],
    enabled=settings.rate_limit_enabled,
)
