"""Pydantic schemas for API requests and responses."""

from .common import ErrorResponse, HealthResponse
from .risk import (
    AssessRequest,
    AssessResponse,
    EvaluateRequest,
    EvaluationOut,
    EvaluationResponse,
    IndicatorsOut,
    IndicatorsRequest,
    IndicatorsResponse,
    ProfileRangesResponse,
    RequiresCalculationResponse,
    ScoreHistoryResponse,
    ScoreOut,
    ScoreRequest,
    ScoreResponse,
)


__all__ = [
    "AssessRequest",
    "AssessResponse",
    "ErrorResponse",
    "EvaluateRequest",
    "EvaluationOut",
    "EvaluationResponse",
    "HealthResponse",
    "IndicatorsOut",
    "IndicatorsRequest",
    "IndicatorsResponse",
    "ProfileRangesResponse",
    "RequiresCalculationResponse",
    "ScoreHistoryResponse",
    "ScoreOut",
    "ScoreRequest",
    "ScoreResponse",
]
