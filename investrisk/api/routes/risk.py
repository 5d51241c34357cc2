"""Risk API routes.

Indicator computation, scoring, profile compatibility and score history
for a user's holdings.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from investrisk.api.dependencies import get_reasoning_gateway, require_user
from investrisk.core.security import TokenData
from investrisk.repositories import investor_profiles_orm as profiles_repo
from investrisk.repositories import risk_scores_orm as scores_repo
from investrisk.risk.compatibility import RequiresCalculation
from investrisk.schemas.risk import (
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
from investrisk.services import risk_assessment
from investrisk.services.openai.gateway import ReasoningGateway


router = APIRouter(prefix="/risk", tags=["Risk"])


# =============================================================================
# PIPELINE STAGES
# =============================================================================


@router.post(
    "/indicators",
    response_model=IndicatorsResponse,
    summary="Compute risk indicators",
)
async def calculate_indicators(
    payload: IndicatorsRequest,
    user: TokenData = Depends(require_user),
) -> IndicatorsResponse:
    """Compute and persist the risk indicators of a holding."""
    run = await risk_assessment.calculate_investment_indicators(
        payload.investment_id,
        payload.asset_type,
        payload.asset_code,
        payload.investment_amount,
    )
    return IndicatorsResponse(
        indicators=IndicatorsOut.from_domain(run.indicators),
        computed=run.computed,
        data_points=run.data_points,
        returns_count=run.returns_count,
    )


@router.post(
    "/score",
    response_model=ScoreResponse,
    summary="Generate risk score",
)
async def generate_score(
    payload: ScoreRequest,
    user: TokenData = Depends(require_user),
    gateway: ReasoningGateway = Depends(get_reasoning_gateway),
) -> ScoreResponse:
    """Score persisted indicators and append the result to the history."""
    run = await risk_assessment.generate_risk_score(
        payload.risk_indicators_id,
        gateway,
        investment_id=payload.investment_id,
    )
    return ScoreResponse(score=ScoreOut.from_domain(run.record), fallback=run.fallback_used)


@router.post(
    "/evaluate",
    response_model=EvaluationResponse | RequiresCalculationResponse,
    summary="Evaluate profile compatibility",
)
async def evaluate(
    payload: EvaluateRequest,
    user: TokenData = Depends(require_user),
) -> EvaluationResponse | RequiresCalculationResponse:
    """Compare the latest score of an investment with the user's profile band."""
    outcome = await risk_assessment.evaluate_investment(user.sub, payload.investment_id)
    if isinstance(outcome, RequiresCalculation):
        return RequiresCalculationResponse(investment_id=outcome.investment_id)
    return EvaluationResponse(evaluation=EvaluationOut.from_domain(outcome))


@router.post(
    "/assess",
    response_model=AssessResponse,
    summary="Assess a holding end to end",
)
async def assess(
    payload: AssessRequest,
    user: TokenData = Depends(require_user),
    gateway: ReasoningGateway = Depends(get_reasoning_gateway),
) -> AssessResponse:
    """
    Evaluate a holding, computing indicators and a score first when none exists.
    """
    run = await risk_assessment.assess_investment(
        user.sub,
        payload.investment_id,
        payload.asset_type,
        payload.asset_code,
        payload.investment_amount,
        gateway,
        recalculate=payload.recalculate,
    )
    return AssessResponse(
        evaluation=EvaluationOut.from_domain(run.evaluation),
        indicators=IndicatorsOut.from_domain(run.indicators.indicators) if run.indicators else None,
        score=ScoreOut.from_domain(run.score.record) if run.score else None,
        fallback=run.score.fallback_used if run.score else None,
        calculated=run.score is not None,
    )


# =============================================================================
# READ-ONLY
# =============================================================================


@router.get(
    "/history/{investment_id}",
    response_model=ScoreHistoryResponse,
    summary="Score history",
)
async def score_history(
    investment_id: str,
    limit: int = Query(50, ge=1, le=500, description="Maximum records"),
    user: TokenData = Depends(require_user),
) -> ScoreHistoryResponse:
    """List the score records of an investment, newest first."""
    records = await scores_repo.list_score_history(investment_id, limit=limit)
    return ScoreHistoryResponse(
        investment_id=investment_id,
        scores=[ScoreOut.from_domain(r) for r in records],
        total=len(records),
    )


@router.get(
    "/profiles",
    response_model=ProfileRangesResponse,
    summary="Investor profile bands",
)
async def list_profiles(
    user: TokenData = Depends(require_user),
) -> ProfileRangesResponse:
    """List the configured investor profile score bands."""
    return ProfileRangesResponse(profiles=await profiles_repo.list_profile_ranges())
