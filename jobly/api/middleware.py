"""
Request id middleware.

Each request gets a short id, returned in the X-Request-ID header and bound
to the logging context for the duration of the request. A caller-supplied
X-Request-ID is reused so ids can be followed across services.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from jobly.core.logging_config import request_id_var

logger = logging.getLogger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(self.header_name) or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{request.method} {request.url.path} {response.status_code} ({elapsed_ms:.1f}ms)")
        finally:
            request_id_var.reset(token)

        response.headers[self.header_name] = request_id
        return response
