from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.analysis.exceptions import (
    AnalysisTimeoutError,
    MalformedResponseError,
    RemoteAnalysisError,
)
from app.api.schemas import ErrorResponse
from app.logging.logger import Log
from app.orchestrator.exceptions import (
    EmptyExtractionError,
    NotFoundError,
    StorageError,
    TooShortError,
    ValidationError,
)

SERVICE_UNAVAILABLE_MESSAGE = (
    "Our AI analysis service is temporarily unavailable. Please try again in a few moments."
)
TIMEOUT_MESSAGE = (
    "The analysis is taking longer than expected. "
    "Please try again with a shorter job description."
)
AI_SERVICE_MESSAGE = (
    "AI service is currently experiencing issues. "
    "Please try again in a few moments or rephrase your job description."
)
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred while processing your request. Please try again."


def error_response(message: str, error_type: str, status_code: int) -> JSONResponse:
    """Build the JSON error body shared by every endpoint."""
    body = ErrorResponse(
        message=message,
        type=error_type,
        status_code=status_code,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _describe(request: Request) -> str:
    return f"{request.method} {request.url.path}"


async def _handle_validation(request: Request, exc: Exception) -> JSONResponse:
    Log.warning(f"Rejected input on {_describe(request)}: {exc}")
    return error_response(str(exc), "validation_error", 400)


async def _handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    Log.warning(f"Malformed request on {_describe(request)}: {errors}")
    return error_response(message, "validation_error", 400)


async def _handle_not_found(request: Request, exc: Exception) -> JSONResponse:
    return error_response(str(exc), "not_found", 404)


async def _handle_timeout(request: Request, exc: Exception) -> JSONResponse:
    Log.warning(f"Analysis engine timeout on {_describe(request)}: {exc}")
    return error_response(TIMEOUT_MESSAGE, "timeout_error", 504)


async def _handle_remote(request: Request, exc: RemoteAnalysisError) -> JSONResponse:
    Log.error(
        f"Analysis engine error on {_describe(request)}: {exc} "
        f"(status={exc.status_code}, body={exc.body!r})"
    )
    return error_response(SERVICE_UNAVAILABLE_MESSAGE, "service_unavailable", 503)


async def _handle_malformed(request: Request, exc: Exception) -> JSONResponse:
    Log.error(f"Malformed analysis engine response on {_describe(request)}: {exc}")
    return error_response(AI_SERVICE_MESSAGE, "ai_service_error", 502)


async def _handle_storage(request: Request, exc: Exception) -> JSONResponse:
    Log.error(f"Storage failure on {_describe(request)}: {exc}")
    return error_response(INTERNAL_ERROR_MESSAGE, "internal_server_error", 500)


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    Log.exception(f"Unhandled error on {_describe(request)}: {type(exc).__name__}: {exc}")
    return error_response(INTERNAL_ERROR_MESSAGE, "internal_server_error", 500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(ValidationError, _handle_validation)
    app.add_exception_handler(EmptyExtractionError, _handle_validation)
    app.add_exception_handler(TooShortError, _handle_validation)
    app.add_exception_handler(NotFoundError, _handle_not_found)
    app.add_exception_handler(AnalysisTimeoutError, _handle_timeout)
    app.add_exception_handler(RemoteAnalysisError, _handle_remote)
    app.add_exception_handler(MalformedResponseError, _handle_malformed)
    app.add_exception_handler(StorageError, _handle_storage)
    app.add_exception_handler(Exception, _handle_unexpected)
