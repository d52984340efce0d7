"""
Request correlation: every request carries an ``X-Request-ID`` that is
bound into log records and echoed on the response.
"""

import uuid
from typing import Optional

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def choose_request_id(incoming: Optional[str]) -> str:
    """Reuse a caller supplied ID unless it is empty or oversized."""
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH:
        return incoming
    return uuid.uuid4().hex


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = choose_request_id(request.headers.get(REQUEST_ID_HEADER))
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
