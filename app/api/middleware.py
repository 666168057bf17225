from starlette.middleware.base import BaseHTTPMiddleware

from api.errors import internal_error_handler
from infrastructure.logging import bind_request_context

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id to every log entry emitted while serving a request.

    Unhandled exceptions are answered here with the opaque 500, so error
    responses carry the correlation header too.
    """

    async def dispatch(self, request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_HEADER),
            request_path=request.url.path,
            request_method=request.method,
        ) as correlation_id:
            try:
                response = await call_next(request)
            except Exception as exc:  # pylint: disable=broad-except
                response = await internal_error_handler(request, exc)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
