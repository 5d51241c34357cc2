"""Core infrastructure: settings, security, logging, exceptions."""

from .config import settings
from .exceptions import (
    AppException,
    DegenerateSeriesError,
    IndicatorsNotFoundError,
    InsufficientDataError,
    NotFoundError,
    ProfileNotFoundError,
    ProfileRangeNotFoundError,
    ReasoningServiceError,
    ReasoningServiceMalformedReply,
    ReasoningServicePaymentRequired,
    ReasoningServiceRateLimited,
    ReasoningServiceUnavailable,
    UnauthenticatedError,
)
from .security import TokenData, create_access_token, decode_access_token


__all__ = [
    "AppException",
    "DegenerateSeriesError",
    "IndicatorsNotFoundError",
    "InsufficientDataError",
    "NotFoundError",
    "ProfileNotFoundError",
    "ProfileRangeNotFoundError",
    "ReasoningServiceError",
    "ReasoningServiceMalformedReply",
    "ReasoningServicePaymentRequired",
    "ReasoningServiceRateLimited",
    "ReasoningServiceUnavailable",
    "TokenData",
    "UnauthenticatedError",
    "create_access_token",
    "decode_access_token",
    "settings",
]
