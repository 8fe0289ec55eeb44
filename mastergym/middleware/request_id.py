import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from mastergym.core.logging import add_log_context, clear_log_context


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to every request and to its log context."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        clear_log_context()
        add_log_context(request_id=request_id)
        try:
            response: Response = await call_next(request)
        finally:
            clear_log_context()

        response.headers["X-Request-ID"] = request_id
        return response
