from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class AppError(Exception):
    def __init__(self, code: str, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(code="not_found", message=message, status_code=404)


class ValidationError(AppError):
    def __init__(self, message: str = "Validation error", code: str = "validation_error") -> None:
        super().__init__(code=code, message=message, status_code=400)


class MissingTransactionIdError(ValidationError):
    def __init__(self, message: str = "transaction_id is required.") -> None:
        super().__init__(message=message, code="missing_transaction_id")


class InvalidDateFormatError(ValidationError):
    def __init__(
        self, message: str = "Invalid startDate or endDate format. Use YYYY-MM-DD."
    ) -> None:
        super().__init__(message=message, code="invalid_date_format")


class InvalidRangeError(ValidationError):
    def __init__(self, message: str = "startDate must be before or equal to endDate.") -> None:
        super().__init__(message=message, code="invalid_range")


class InvalidPeriodError(ValidationError):
    def __init__(self, message: str = "Invalid period parameter provided.") -> None:
        super().__init__(message=message, code="invalid_period")


class ConflictingFiltersError(ValidationError):
    def __init__(
        self, message: str = "Use either period or startDate/endDate to filter, not both."
    ) -> None:
        super().__init__(message=message, code="conflicting_filters")


class ConflictError(AppError):
    def __init__(self, message: str = "Resource already exists") -> None:
        super().__init__(code="conflict", message=message, status_code=409)


class StorageError(AppError):
    def __init__(self, message: str = "Storage request failed") -> None:
        super().__init__(code="storage_error", message=message, status_code=502)


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    envelope = ErrorEnvelope(error=ErrorDetail(code=exc.code, message=exc.message))
    return JSONResponse(status_code=exc.status_code, content=envelope.model_dump())


def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    envelope = ErrorEnvelope(
        error=ErrorDetail(
            code="validation_error",
            message="Validation error",
            details={"errors": jsonable_encoder(exc.errors())},
        )
    )
    return JSONResponse(status_code=422, content=envelope.model_dump())
