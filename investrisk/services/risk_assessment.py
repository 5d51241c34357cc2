"""Risk assessment service.

Orchestrates the three stages of the pipeline against the repositories:

1. calculate_investment_indicators: reference series -> persisted indicators
2. generate_risk_score: persisted indicators -> persisted score record
3. evaluate_investment: latest score + investor profile -> compatibility

No session is held across the reasoning call: indicators are loaded in one
session and the score is written in a fresh one.
"""

from __future__ import annotations

from dataclasses import dataclass

from investrisk.core.exceptions import (
    IndicatorsNotFoundError,
    InsufficientDataError,
    ProfileNotFoundError,
    ProfileRangeNotFoundError,
    ReasoningServiceError,
)
from investrisk.core.logging import get_logger
from investrisk.domain.risk import ProfileBand, RiskIndicators, RiskScoreRecord
from investrisk.repositories import (
    investor_profiles_orm,
    market_data_orm,
    risk_indicators_orm,
    risk_scores_orm,
)
from investrisk.risk.compatibility import (
    CompatibilityEvaluation,
    RequiresCalculation,
    evaluate_compatibility,
)
from investrisk.risk.config import get_risk_config
from investrisk.risk.indicators import compute_indicators
from investrisk.risk.scoring import ScoreResult, reconcile, score_deterministically
from investrisk.services.openai.gateway import ReasoningGateway


logger = get_logger("services.risk_assessment")


@dataclass(frozen=True)
class IndicatorRun:
    """Stored indicators plus how they were obtained."""

    indicators: RiskIndicators
    computed: bool
    data_points: int
    returns_count: int


@dataclass(frozen=True)
class ScoreRun:
    """Stored score record of one scoring run."""

    record: RiskScoreRecord
    fallback_used: bool


@dataclass(frozen=True)
class AssessmentRun:
    """Outcome of the full pipeline for one holding."""

    evaluation: CompatibilityEvaluation
    indicators: IndicatorRun | None = None
    score: ScoreRun | None = None


async def calculate_investment_indicators(
    investment_id: str,
    asset_type: str,
    asset_code: str,
    investment_amount: float,
) -> IndicatorRun:
    """
    Compute and persist the risk indicators of a holding.

    Raises:
        InsufficientDataError: no reference rows exist for the instrument
    """
    config = get_risk_config()
    points = await market_data_orm.get_historical_points(
        asset_type, asset_code, limit=config.history_limit
    )
    if not points:
        logger.info(
            "No reference data",
            extra={"investment_id": investment_id, "asset_type": asset_type, "asset_code": asset_code},
        )
        raise InsufficientDataError(
            details={"asset_type": asset_type, "asset_code": asset_code}
        )

    computation = compute_indicators(points, asset_type, investment_amount, config)
    stored = await risk_indicators_orm.create_indicators(
        investment_id,
        computation.indicators,
        market_data_orm.data_source_label(asset_type),
    )

    logger.info(
        "Indicators stored" if computation.computed else "Default indicators stored",
        extra={
            "investment_id": investment_id,
            "risk_indicators_id": stored.id,
            "asset_type": asset_type,
            "asset_code": asset_code,
            "computed": computation.computed,
            "data_points": computation.data_points,
            "returns_count": computation.returns_count,
        },
    )
    return IndicatorRun(
        indicators=stored,
        computed=computation.computed,
        data_points=computation.data_points,
        returns_count=computation.returns_count,
    )


async def generate_risk_score(
    risk_indicators_id: int,
    gateway: ReasoningGateway,
    investment_id: str | None = None,
) -> ScoreRun:
    """
    Score persisted indicators and append the result to the history.

    The assisted score is tried first. Rate-limit and payment-required
    failures abort the run; every other reasoning failure falls back to the
    deterministic score.

    Raises:
        IndicatorsNotFoundError: the indicators id does not exist
        ReasoningServiceRateLimited, ReasoningServicePaymentRequired
    """
    indicators = await risk_indicators_orm.get_indicators(risk_indicators_id)
    if indicators is None:
        raise IndicatorsNotFoundError(details={"risk_indicators_id": risk_indicators_id})

    investment_id = investment_id or indicators.source_investment_id
    profile_ranges = await investor_profiles_orm.list_profile_ranges()
    indicator_set = indicators.to_indicator_set()

    result: ScoreResult
    try:
        result = await gateway.assess_risk(indicator_set, profile_ranges)
    except ReasoningServiceError as e:
        if e.terminal:
            logger.error(
                "Assisted scoring aborted",
                extra={
                    "investment_id": investment_id,
                    "risk_indicators_id": risk_indicators_id,
                    "error_code": e.error_code,
                },
            )
            raise
        logger.warning(
            f"Assisted scoring failed ({e.message}), using deterministic score",
            extra={
                "investment_id": investment_id,
                "risk_indicators_id": risk_indicators_id,
                "error_code": e.error_code,
                "fallback": True,
            },
        )
        result = score_deterministically(indicator_set)

    assessment = reconcile(result)
    record = await risk_scores_orm.create_score(investment_id, risk_indicators_id, assessment)

    logger.info(
        "Score stored",
        extra={
            "investment_id": investment_id,
            "risk_indicators_id": risk_indicators_id,
            "score": record.score,
            "risk_category": record.risk_category,
            "fallback": assessment.fallback_used,
        },
    )
    return ScoreRun(record=record, fallback_used=assessment.fallback_used)


async def _resolve_profile(user_id: str) -> tuple[str, ProfileBand]:
    profile_name = await investor_profiles_orm.get_investor_profile_name(user_id)
    if not profile_name:
        raise ProfileNotFoundError()

    band = await investor_profiles_orm.get_profile_range(profile_name)
    if band is None:
        raise ProfileRangeNotFoundError(details={"profile_name": profile_name})

    return profile_name, band


async def evaluate_investment(
    user_id: str,
    investment_id: str,
) -> CompatibilityEvaluation | RequiresCalculation:
    """
    Evaluate the latest score of an investment against the user's profile.

    Returns RequiresCalculation when the investment has never been scored.

    Raises:
        ProfileNotFoundError: user has no declared profile
        ProfileRangeNotFoundError: no band is configured for the profile
    """
    profile_name, band = await _resolve_profile(user_id)

    latest = await risk_scores_orm.get_latest_score(investment_id)
    if latest is None:
        logger.info("No risk score, calculation required", extra={"investment_id": investment_id})
        return RequiresCalculation(investment_id=investment_id)

    evaluation = evaluate_compatibility(latest.score, profile_name, band)
    logger.info(
        "Investment evaluated",
        extra={
            "investment_id": investment_id,
            "score": latest.score,
            "profile": profile_name,
            "status": evaluation.status,
        },
    )
    return evaluation


async def assess_investment(
    user_id: str,
    investment_id: str,
    asset_type: str,
    asset_code: str,
    investment_amount: float,
    gateway: ReasoningGateway,
    recalculate: bool = False,
) -> AssessmentRun:
    """
    Run the whole pipeline for a holding.

    An existing score is reused unless ``recalculate`` is set. Otherwise the
    indicators are computed, scored and the fresh score is evaluated.
    """
    if not recalculate:
        outcome = await evaluate_investment(user_id, investment_id)
        if isinstance(outcome, CompatibilityEvaluation):
            return AssessmentRun(evaluation=outcome)
    else:
        # Fail on a missing profile before doing any work
        await _resolve_profile(user_id)

    indicator_run = await calculate_investment_indicators(
        investment_id, asset_type, asset_code, investment_amount
    )
    score_run = await generate_risk_score(
        indicator_run.indicators.id, gateway, investment_id=investment_id
    )

    outcome = await evaluate_investment(user_id, investment_id)
    if isinstance(outcome, RequiresCalculation):
        # The score was just written; a miss means the store lost it
        raise RuntimeError(f"Score for investment {investment_id} not found after persisting it")

    return AssessmentRun(evaluation=outcome, indicators=indicator_run, score=score_run)
