import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.core.logging import add_log_context, clear_log_context


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to add request ID to all requests and bind it to the log context."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID")

        if not request_id:
            request_id = str(uuid.uuid4())

        request.state.request_id = request_id
        clear_log_context()
        add_log_context(request_id=request_id)

        try:
            response: Response = await call_next(request)
        finally:
            clear_log_context()
        response.headers["X-Request-ID"] = request_id

        return response
