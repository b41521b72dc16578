import logging
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("message_service.requests")

# Log method, path, status and duration for every request
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "method=%s path=%s status=500 duration_ms=%.2f",
                request.method, request.url.path, self._elapsed_ms(start_time)
            )
            raise

        logger.info(
            "method=%s path=%s status=%s duration_ms=%.2f",
            request.method, request.url.path, response.status_code, self._elapsed_ms(start_time)
        )
        return response

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return round((time.perf_counter() - start_time) * 1000, 2)
