"""
Request middleware.
"""

from starlette.middleware.base import BaseHTTPMiddleware

from ..constants import CORRELATION_ID_HEADER
from ..observability.logging import clear_correlation_id, set_correlation_id


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID to each request's logs and echo it back."""

    async def dispatch(self, request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
