# liftlog/deps/rate_limit.py
from functools import lru_cache

from fastapi import Depends, Request

from liftlog.rate_limit import InMemoryRateLimitStore, RateLimiter, resolve_client_ip
from liftlog.settings import Settings, get_settings

@lru_cache
def get_rate_limiter() -> RateLimiter:
    """Process-wide limiter built from settings. Tests override this dependency."""
    s = get_settings()
    return RateLimiter(
        InMemoryRateLimitStore(),
        max_attempts=s.RATE_LIMIT_MAX_ATTEMPTS,
        window_seconds=s.RATE_LIMIT_WINDOW_SECONDS,
        sweep_on_check=s.RATE_LIMIT_SWEEP_ON_CHECK,
    )

def check_auth_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Count one authentication attempt for the calling client.

    Usage: dependencies=[Depends(check_auth_rate_limit)]
    Raises RateLimitExceeded, which main.py turns into a 429.
    """
    if not settings.RATE_LIMIT_ENABLED:
        return
    limiter.check(resolve_client_ip(request.headers))
