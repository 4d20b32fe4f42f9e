"""HTTP error mapping for the flashgen API."""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from flashgen_core.generation.errors import BatchErrorKind, FlashcardBatchError
from flashgen_core.schemas.cards import ApiError, ApiErrorDetail

logger = structlog.get_logger()

LIMIT_SUGGESTION = "Delete some existing flashcards or reject more generated cards"

# Text fields whose submitted length is echoed back on validation errors
LENGTH_CHECKED_FIELDS = frozenset({"input_text", "front_text", "back_text"})

# Every BatchErrorKind must have an entry
BATCH_ERROR_RESPONSES: dict[BatchErrorKind, tuple[int, str]] = {
    BatchErrorKind.VALIDATION: (400, "VALIDATION_ERROR"),
    BatchErrorKind.BATCH_NOT_FOUND: (404, "BATCH_NOT_FOUND"),
    BatchErrorKind.ALREADY_REVIEWED: (409, "BATCH_ALREADY_REVIEWED"),
    BatchErrorKind.LIMIT_EXCEEDED: (403, "FLASHCARD_LIMIT_EXCEEDED"),
    BatchErrorKind.GENERATION: (502, "GENERATION_FAILED"),
}


class ApiException(Exception):
    """Raised by routes and dependencies to return an ApiError body."""

    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message


def error_response(status_code: int, error: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(exclude_none=True),
    )


def batch_error_to_api_error(exc: FlashcardBatchError) -> tuple[int, ApiError]:
    """Map a service error to a status code and response body."""
    status_code, code = BATCH_ERROR_RESPONSES[exc.kind]
    error = ApiError(error=code, message=exc.message)
    if exc.kind == BatchErrorKind.LIMIT_EXCEEDED:
        error.current_count = exc.current_count
        error.limit = exc.limit
        error.suggestion = LIMIT_SUGGESTION
    return status_code, error


def _validation_details(errors: list[dict[str, Any]]) -> list[ApiErrorDetail]:
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        value = err.get("input")
        tracks_length = bool(loc) and loc[-1] in LENGTH_CHECKED_FIELDS
        details.append(
            ApiErrorDetail(
                field=".".join(loc),
                message=str(err.get("msg", "")).removeprefix("Value error, "),
                received_length=(
                    len(value) if tracks_length and isinstance(value, str) else None
                ),
            )
        )
    return details


async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    return error_response(exc.status_code, ApiError(error=exc.error, message=exc.message))


async def batch_error_handler(
    request: Request, exc: FlashcardBatchError
) -> JSONResponse:
    status_code, error = batch_error_to_api_error(exc)
    logger.info(
        "batch_request_failed",
        path=request.url.path,
        kind=exc.kind.value,
        status_code=status_code,
    )
    return error_response(status_code, error)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = (
        "Invalid review decisions"
        if request.url.path.endswith("/review")
        else "Validation failed"
    )
    return error_response(
        400,
        ApiError(
            error="VALIDATION_ERROR",
            message=message,
            details=_validation_details(list(exc.errors())),
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the ApiError handlers on the application."""
    app.add_exception_handler(ApiException, api_exception_handler)
    app.add_exception_handler(FlashcardBatchError, batch_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
