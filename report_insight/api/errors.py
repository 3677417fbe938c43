"""Domain error → HTTP response mapping."""

from typing import Dict, Type

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from report_insight.domain.shared.errors import (
    DatabaseError,
    DietPlanNotFoundError,
    DomainError,
    ExternalServiceError,
    PdfExtractionError,
    RateLimitError,
    ReportNotFoundError,
    ServiceUnavailableError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

# Most specific first
STATUS_BY_ERROR: Dict[Type[DomainError], int] = {
    ValidationError: 400,
    PdfExtractionError: 400,
    ReportNotFoundError: 404,
    DietPlanNotFoundError: 404,
    RateLimitError: 429,
    ServiceUnavailableError: 503,
    ExternalServiceError: 502,
    DatabaseError: 503,
}


class ErrorResponse(BaseModel):
    """Response model for errors."""

    error: str
    detail: str


def status_for(error: DomainError) -> int:
    for error_type, status in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status
    return 500


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status = status_for(exc) if isinstance(exc, DomainError) else 500
    if status >= 500:
        logger.error("api.error", path=request.url.path, error=type(exc).__name__, detail=str(exc))
    else:
        logger.info("api.rejected", path=request.url.path, error=type(exc).__name__, status=status)
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=status, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
