"""
Request ID middleware.

Each request gets an id (the client's ``X-Request-ID`` if it sent one, a
fresh UUID otherwise). The id is stored on ``request.state``, held in a
context variable so ``RequestIDFilter`` can attach it to every log record
written while the request runs, and echoed back in the response headers.
"""

import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.logging_config import request_id_var

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        # Context-local, so concurrent requests never see each other's id
        token = request_id_var.set(request_id)
        try:
            response: Response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)


def get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)
