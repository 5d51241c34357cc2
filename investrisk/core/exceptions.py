"""Custom exceptions and centralized exception handlers."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class AppException(Exception):
    """Base application exception with structured error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_ERROR"
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.status_code = status_code or self.status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to RFC 7807 problem+json style response."""
        return {
            "error": self.error_code,
            "message": self.message,
            "status": self.status_code,
            **({"details": self.details} if self.details else {}),
        }


class NotFoundError(AppException):
    """Resource not found."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    message = "Resource not found"


class UnauthenticatedError(AppException):
    """Authentication missing or invalid."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTHENTICATION_FAILED"
    message = "Authentication required"


# =============================================================================
# RISK PIPELINE ERRORS
# =============================================================================


class InsufficientDataError(NotFoundError):
    """No historical rows exist for the instrument."""

    error_code = "INSUFFICIENT_DATA"
    message = "Dados insuficientes para calcular risco"


class DegenerateSeriesError(Exception):
    """Series is present but statistically degenerate (zero volatility).

    Never leaves the indicator calculator; it falls back to the default profile.
    """


class IndicatorsNotFoundError(NotFoundError):
    """Referenced risk indicators do not exist."""

    error_code = "INDICATORS_NOT_FOUND"
    message = "Indicators not found"


class ProfileNotFoundError(NotFoundError):
    """User has no investor profile on record."""

    error_code = "PROFILE_NOT_FOUND"
    message = "User profile not found or incomplete"


class ProfileRangeNotFoundError(NotFoundError):
    """No score band is configured for the investor profile."""

    error_code = "PROFILE_RANGE_NOT_FOUND"
    message = "Profile range not found"


# =============================================================================
# REASONING SERVICE ERRORS
# =============================================================================


class ReasoningServiceError(AppException):
    """Base class for reasoning service failures."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "REASONING_SERVICE_ERROR"
    message = "Reasoning service error"

    #: Terminal errors abort the scoring run; others trigger the deterministic fallback.
    terminal: bool = False


class ReasoningServiceRateLimited(ReasoningServiceError):
    """Reasoning service answered 429."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    error_code = "REASONING_RATE_LIMITED"
    message = "Rate limit exceeded. Please try again later."
    terminal = True


class ReasoningServicePaymentRequired(ReasoningServiceError):
    """Reasoning service answered 402 (credits or quota exhausted)."""

    status_code = status.HTTP_402_PAYMENT_REQUIRED
    error_code = "REASONING_PAYMENT_REQUIRED"
    message = "Payment required. Please add credits to the reasoning service account."
    terminal = True


class ReasoningServiceUnavailable(ReasoningServiceError):
    """Transport failure, timeout, missing credentials or unexpected status."""

    error_code = "REASONING_UNAVAILABLE"
    message = "Reasoning service unavailable"


class ReasoningServiceMalformedReply(ReasoningServiceError):
    """Reply is not the expected JSON object or fails validation."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "REASONING_MALFORMED_REPLY"
    message = "Reasoning service returned an invalid reply"


def register_exception_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers={"X-Request-ID": getattr(request.state, "request_id", "unknown")},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger = logging.getLogger("investrisk.error")
        logger.exception(
            "Unhandled exception",
            extra={
                "request_id": getattr(request.state, "request_id", "unknown"),
                "path": request.url.path,
                "method": request.method,
            },
        )

        from .config import settings

        if settings.debug:
            message = str(exc)
        else:
            message = "An unexpected error occurred"

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "INTERNAL_ERROR",
                "message": message,
                "status": 500,
            },
            headers={"X-Request-ID": getattr(request.state, "request_id", "unknown")},
        )
