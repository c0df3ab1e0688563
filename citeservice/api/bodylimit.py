"""Request body size limit middleware."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose body exceeds `max_body_bytes` with 413."""

    def __init__(self, app, max_body_bytes: int = 1_048_576):
        super().__init__(app)
        self._max_body_bytes = max_body_bytes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method in ("GET", "HEAD", "OPTIONS"):
            return await call_next(request)

        declared = request.headers.get("content-length")
        if declared is not None:
            try:
                size = int(declared)
            except ValueError:
                return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
        else:
            # Chunked upload: measure the buffered body instead.
            size = len(await request.body())

        if size > self._max_body_bytes:
            logger.warning(
                "Rejected %s %s: body of %d bytes exceeds %d",
                request.method,
                request.url.path,
                size,
                self._max_body_bytes,
            )
            return JSONResponse(
                status_code=413,
                content={
                    "detail": "Request body too large",
                    "limit_bytes": self._max_body_bytes,
                },
            )

        return await call_next(request)
