"""Risk API schemas: requests and responses of the /risk routes."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from investrisk.domain.risk import ProfileBand, RiskIndicators, RiskScoreRecord
from investrisk.risk.compatibility import CompatibilityEvaluation


# =============================================================================
# REQUESTS
# =============================================================================


class IndicatorsRequest(BaseModel):
    """Compute indicators for a holding."""

    investment_id: str = Field(..., min_length=1, max_length=64)
    asset_type: str = Field(..., min_length=1, max_length=50, examples=["debenture"])
    asset_code: str = Field(..., min_length=1, max_length=60, examples=["PETR16"])
    investment_amount: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Invested amount in BRL"
    )


class ScoreRequest(BaseModel):
    """Score a persisted indicator set."""

    risk_indicators_id: int = Field(..., ge=1)
    investment_id: Optional[str] = Field(
        None, max_length=64, description="Defaults to the investment of the indicators"
    )


class EvaluateRequest(BaseModel):
    """Evaluate the latest score of an investment."""

    investment_id: str = Field(..., min_length=1, max_length=64)


class AssessRequest(IndicatorsRequest):
    """Run the full pipeline for a holding."""

    recalculate: bool = Field(False, description="Ignore an existing score and compute a new one")


# =============================================================================
# RESPONSES
# =============================================================================


class IndicatorsOut(BaseModel):
    """Persisted indicator set."""

    id: int
    source_investment_id: str
    var_95: float
    beta: float
    sharpe_ratio: float
    std_deviation: float
    expected_return: float
    data_source: str
    calculated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, indicators: RiskIndicators) -> IndicatorsOut:
        return cls(**indicators.model_dump())


class IndicatorsResponse(BaseModel):
    success: Literal[True] = True
    indicators: IndicatorsOut
    computed: bool = Field(..., description="False when the default profile was used")
    data_points: int
    returns_count: int


class ScoreOut(BaseModel):
    """Persisted score record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    investment_id: str
    risk_indicators_id: int
    score: int
    justification: str
    risk_category: str
    compatible_with_conservador: bool
    compatible_with_moderado: bool
    compatible_with_arrojado: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, record: RiskScoreRecord) -> ScoreOut:
        return cls.model_validate(record)


class ScoreResponse(BaseModel):
    success: Literal[True] = True
    score: ScoreOut
    fallback: bool = Field(..., description="True when the deterministic score was used")


class ProfileRangeOut(BaseModel):
    min: int
    max: int


class EvaluationOut(BaseModel):
    status: Literal["green", "yellow", "red"]
    score: int
    user_profile: str
    profile_range: ProfileRangeOut
    message: str
    compatibility: str

    @classmethod
    def from_domain(cls, evaluation: CompatibilityEvaluation) -> EvaluationOut:
        return cls(
            status=evaluation.status,
            score=evaluation.score,
            user_profile=evaluation.user_profile,
            profile_range=ProfileRangeOut(min=evaluation.profile_min, max=evaluation.profile_max),
            message=evaluation.message,
            compatibility=evaluation.compatibility,
        )


class EvaluationResponse(BaseModel):
    success: Literal[True] = True
    evaluation: EvaluationOut


class RequiresCalculationResponse(BaseModel):
    success: Literal[False] = False
    requires_calculation: Literal[True] = True
    investment_id: str


class AssessResponse(BaseModel):
    success: Literal[True] = True
    evaluation: EvaluationOut
    indicators: Optional[IndicatorsOut] = None
    score: Optional[ScoreOut] = None
    fallback: Optional[bool] = None
    calculated: bool = Field(..., description="True when a new score was computed")


class ScoreHistoryResponse(BaseModel):
    investment_id: str
    scores: list[ScoreOut]
    total: int


class ProfileRangesResponse(BaseModel):
    profiles: list[ProfileBand]
