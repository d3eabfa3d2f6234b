# rentledger/middleware/structured_logging.py
from __future__ import annotations

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .request_id import REQUEST_ID_HEADER, request_id_ctx, resolve_request_id

log = logging.getLogger("rentledger.request")


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Binds a request id for the duration of the request, echoes it in
    X-Request-ID and emits one log line per request with:
      request_id, method, path, status_code, latency_ms, staff_user
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        t0 = time.time()

        rid = resolve_request_id(request.headers)
        request.state.request_id = rid
        token = request_id_ctx.set(rid)

        # auth lives upstream; the gateway forwards the staff identity as a header
        staff_user = request.headers.get("X-Staff-User")

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            log.info(
                "http_request",
                extra={
                    "request_id": rid,
                    "method": request.method,
                    "path": request.url.path,
                    "query": str(request.url.query) if request.url.query else "",
                    "status_code": status_code,
                    "latency_ms": int((time.time() - t0) * 1000),
                    "staff_user": staff_user,
                },
            )
            request_id_ctx.reset(token)
