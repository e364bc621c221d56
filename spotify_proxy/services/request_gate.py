# spotify_proxy/services/request_gate.py
import logging
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from spotify_proxy.api.exceptions import ProxyError, UnauthorizedError, error_response

logger = logging.getLogger(__name__)


def check_shared_secret(authorization: Optional[str], shared_secret: str) -> None:
    """
    Authorization: Basic <shared secret>
    The credential is compared verbatim; it is not a user:password pair.
    """
    if not authorization:
        raise UnauthorizedError("Missing Authorization header")

    parts = authorization.split(None, 1)
    if len(parts) != 2 or parts[0] != "Basic":
        raise UnauthorizedError("Invalid Authorization scheme")

    if parts[1] != shared_secret:
        raise UnauthorizedError("Shared secret mismatch")


class RequestGateMiddleware(BaseHTTPMiddleware):
    """
    Runs before routing:
    1. OPTIONS is answered right away (CORSMiddleware wraps this and adds headers)
    2. the shared secret is checked for everything else
    3. anything the route handlers let escape becomes a generic 500
    """

    def __init__(self, app, shared_secret: str):
        super().__init__(app)
        self.shared_secret = shared_secret

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204)

        try:
            check_shared_secret(request.headers.get("authorization"), self.shared_secret)
        except UnauthorizedError as e:
            logger.warning(f"Rejected {request.method} {request.url.path}: {e}")
            return error_response(e)

        try:
            return await call_next(request)
        except Exception:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            return error_response(ProxyError())
