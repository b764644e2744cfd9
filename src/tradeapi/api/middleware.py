"""Shared-secret authentication for every route."""

import hmac
import logging
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from tradeapi.errors import AuthError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Reject requests whose ``x-api-key`` header does not match the API key.

    Runs before routing and body parsing, so the body never influences the
    outcome of the check.
    """

    def __init__(self, app, api_key: str):
        super().__init__(app)
        self._api_key = api_key.encode("utf-8")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        provided = request.headers.get(API_KEY_HEADER)

        if not provided or not hmac.compare_digest(provided.encode("utf-8"), self._api_key):
            error = AuthError("Unauthorized: Invalid API key")
            logger.warning(f"Rejected request to {request.url.path}: invalid API key")
            return JSONResponse(
                status_code=error.status_code,
                content={"error": error.message},
            )

        return await call_next(request)
