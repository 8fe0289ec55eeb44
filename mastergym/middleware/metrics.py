from time import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from mastergym.core.logging import get_logger
from mastergym.core.metrics import track_http_request

logger = get_logger(__name__)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time()
        method = request.method

        try:
            response = await call_next(request)
        except Exception:
            path = self._get_endpoint_path(request)
            track_http_request(method=method, endpoint=path, status=500, duration=time() - start_time)
            logger.exception("request_failed", method=method, path=path)
            raise

        duration = time() - start_time
        path = self._get_endpoint_path(request)
        track_http_request(method=method, endpoint=path, status=response.status_code, duration=duration)
        logger.debug(
            "request_completed",
            method=method,
            path=path,
            status=response.status_code,
            duration=duration,
        )
        return response

    @staticmethod
    def _get_endpoint_path(request: Request) -> str:
        # Routing fills in the matched route; its template keeps label cardinality bounded
        route = request.scope.get("route")
        return getattr(route, "path", request.url.path)
