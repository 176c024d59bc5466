import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ResumeServiceError(Exception):
    """Base error for failures inside the upload pipeline."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PdfExtractionError(ResumeServiceError):
    pass


class AIServiceError(ResumeServiceError):
    pass


class AIServiceNotConfigured(AIServiceError):
    status_code = 503


class PersistenceError(ResumeServiceError):
    pass


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"Invalid request: {location} {errors[0].get('msg', '')}".strip()
    else:
        message = "Invalid request"
    return error_response(400, message)


async def service_exception_handler(request: Request, exc: ResumeServiceError):
    return error_response(exc.status_code, exc.message)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, str(exc) or "Server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ResumeServiceError, service_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
