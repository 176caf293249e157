"""Request logging middleware"""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

logger = logging.getLogger("src.api.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of every request"""

    def __init__(self, app, exclude_paths: list[str] | None = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or ["/health", "/docs", "/redoc", "/openapi.json"]

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if any(request.url.path.startswith(p) for p in self.exclude_paths):
            return await call_next(request)

        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as exc:
            duration = (time.time() - start_time) * 1000
            logger.error(
                f"request_id={request_id} {request.method} {request.url.path} "
                f"- {exc.__class__.__name__} ({duration:.0f}ms)"
            )
            raise

        duration = (time.time() - start_time) * 1000
        logger.info(
            f"request_id={request_id} {request.method} {request.url.path} "
            f"status_code={response.status_code} ({duration:.0f}ms)"
        )
        response.headers["X-Request-Id"] = request_id
        return response
