import logging
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware

from upraze.core.logging import LOGGER_NAME, latency_bucket_ms, request_id_ctx_var

REQUEST_ID_HEADER = "x-request-id"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request_id for the duration of a request.

    An incoming x-request-id is reused so callers can correlate momentum
    computations with their own logs; otherwise a uuid4 is minted.
    """

    def __init__(self, app, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request, call_next):
        rid = request.headers.get(self.header_name) or str(uuid4())
        request.state.request_id = rid
        token = request_id_ctx_var.set(rid)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_ctx_var.reset(token)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[self.header_name] = rid
        logging.getLogger(LOGGER_NAME).info(
            "request.complete",
            extra={
                "request_id": rid,
                "path": request.url.path,
                "method": request.method,
                "status": response.status_code,
                "latency_bucket": latency_bucket_ms(elapsed_ms),
            },
        )
        return response
