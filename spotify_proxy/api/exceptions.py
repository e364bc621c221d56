# spotify_proxy/api/exceptions.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ProxyError(Exception):
    """
    Base error for the proxy. `message` is what the client sees;
    the constructor argument is internal detail and only goes to the log.
    """

    status_code = 500
    message = "Internal Server Error"


class MissingRefreshTokenError(ProxyError):
    pass


class UpstreamAuthError(ProxyError):
    pass


class UpstreamFetchError(ProxyError):
    pass


class UnauthorizedError(ProxyError):
    status_code = 401
    message = "Unauthorized"


class NotFoundError(ProxyError):
    status_code = 404
    message = "404, not found!"


def error_response(exc: ProxyError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": exc.status_code, "error": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProxyError)
    async def handle_proxy_error(request: Request, exc: ProxyError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
        return error_response(exc)

    # Unmatched path (404) and matched path with the wrong method (405)
    # both count as "no route" for this service.
    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return error_response(NotFoundError())
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": exc.status_code, "error": exc.detail},
            headers=getattr(exc, "headers", None),
        )
