"""Error handlers mapping package exceptions onto JSON responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from credentials_facebook.core.logging import get_logger
from credentials_facebook.exceptions import (
    AuthenticationError,
    CredentialsFacebookError,
)


logger = get_logger(__name__)


def error_response(exc: CredentialsFacebookError) -> JSONResponse:
    headers = exc.headers if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"type": exc.error_type, "message": exc.message}},
        headers=headers or None,
    )


def setup_error_handlers(app: FastAPI) -> None:
    """Register handlers for ``CredentialsFacebookError`` and its subclasses.

    Args:
        app: FastAPI application instance
    """

    async def credentials_error_handler(request: Request, exc: Exception) -> JSONResponse:
        assert isinstance(exc, CredentialsFacebookError)
        log_kwargs = {
            "error_type": exc.error_type,
            "error_message": exc.message,
            "status_code": exc.status_code,
            "request_method": request.method,
            "request_url": str(request.url.path),
        }
        if exc.status_code >= 500:
            logger.error("credentials_error", **log_kwargs)
        else:
            if request.client:
                log_kwargs["client_ip"] = request.client.host
            logger.info("credentials_error", **log_kwargs)
        return error_response(exc)

    app.add_exception_handler(CredentialsFacebookError, credentials_error_handler)
    logger.debug("error_handlers_setup_complete")
