"""
FastAPI middleware for request tracing.
"""

import logging
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from .logging_config import reset_request_id, set_request_id

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each request.
    The ID is available in request.state.request_id, stamped on every log
    record emitted while the request is handled, and returned in the
    X-Request-ID header.
    """

    async def dispatch(self, request: Request, call_next):
        # Reuse the caller's ID when one is supplied (e.g. from a proxy)
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = set_request_id(request_id)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            logger.debug("%s %s -> %d", request.method, request.url.path, response.status_code)
            return response
        finally:
            reset_request_id(token)
