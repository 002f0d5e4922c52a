# backend/teamtasks/core/errors.py

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from teamtasks.core.logger import logger


# ------------------------------------------------
# ERROR KINDS
# ------------------------------------------------

class AppError(Exception):
    """Base for every error surfaced to the caller as a JSON body."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str | None = None, issues: list[dict] | None = None):
        self.message = message or self.default_message
        self.issues = issues
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


# ------------------------------------------------
# RESPONSE ENVELOPE
# ------------------------------------------------

def error_body(status_code: int, message: str, issues: list[dict] | None = None) -> dict:
    body = {"status": "error", "statusCode": status_code, "message": message}
    if issues:
        body["issues"] = issues
    return body


def _request_id(request: Request):
    return getattr(request.state, "request_id", None)


async def app_error_handler(request: Request, exc: AppError):
    logger.info(
        exc.message,
        extra={
            "request_id": _request_id(request),
            "method": request.method,
            "path": request.url.path,
            "status_code": exc.status_code,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.message, exc.issues),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    issues = []
    for err in exc.errors():
        # drop the "body"/"path"/"query" prefix
        loc = [str(part) for part in err.get("loc", ())[1:]]
        issues.append({"field": ".".join(loc) or None, "message": err.get("msg")})

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(status.HTTP_400_BAD_REQUEST, "Validation failed", issues),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    # Storage-level unique constraint won a race against an application check
    logger.warning(
        "Integrity error",
        extra={
            "request_id": _request_id(request),
            "method": request.method,
            "path": request.url.path,
            "status_code": status.HTTP_409_CONFLICT,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_body(status.HTTP_409_CONFLICT, "Conflicting resource already exists"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
