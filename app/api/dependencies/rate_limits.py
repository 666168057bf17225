"""Per-client rate limits for the query surface.

Health probes hit /health and /version every few seconds, so they get a
generous limit; directory lookups are capped lower to protect the table's
read capacity.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from infrastructure.logging import get_module_logger

logger = get_module_logger()

HEALTHCHECK_LIMIT = "50/minute"
QUERY_LIMIT = "120/minute"

limiter = Limiter(key_func=get_remote_address)


async def rate_limit_handler(request: Request, exc: Exception):
    """Return 429 with the directory API's error shape."""
    logger.warning(
        "rate_limit_exceeded",
        path=request.url.path,
        client=get_remote_address(request),
        limit=str(getattr(exc, "detail", "")),
    )
    return JSONResponse(status_code=429, content={"error": "Rate limit exceeded"})


def setup_rate_limiter(app: FastAPI) -> None:
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter() -> Limiter:
    return limiter
