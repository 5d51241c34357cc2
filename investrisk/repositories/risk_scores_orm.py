"""Risk score history repository using SQLAlchemy ORM.

Scores are append-only. The current score of an investment is the record
with the latest created_at, ties broken by the larger id.

Usage:
    from investrisk.repositories import risk_scores_orm

    record = await risk_scores_orm.create_score(investment_id, indicators_id, assessment)
    latest = await risk_scores_orm.get_latest_score(investment_id)
"""

from __future__ import annotations

from sqlalchemy import select

from investrisk.core.logging import get_logger
from investrisk.database.connection import get_session
from investrisk.database.orm import RiskScoreHistory
from investrisk.domain.risk import RiskScoreRecord
from investrisk.risk.scoring import ScoreAssessment


logger = get_logger("repositories.risk_scores_orm")


async def create_score(
    investment_id: str,
    risk_indicators_id: int,
    assessment: ScoreAssessment,
) -> RiskScoreRecord:
    """Append a score record for an investment."""
    async with get_session() as session:
        row = RiskScoreHistory(
            investment_id=investment_id,
            risk_indicators_id=risk_indicators_id,
            score=assessment.score,
            justification=assessment.justification,
            risk_category=assessment.risk_category,
            compatible_with_conservador=assessment.compatible_with_conservador,
            compatible_with_moderado=assessment.compatible_with_moderado,
            compatible_with_arrojado=assessment.compatible_with_arrojado,
            fallback_used=assessment.fallback_used,
        )
        session.add(row)
        await session.commit()
        await session.refresh(row)

        logger.debug(
            f"Stored score record {row.id}",
            extra={"investment_id": investment_id, "score": row.score, "fallback": row.fallback_used},
        )
        return RiskScoreRecord.model_validate(row)


async def get_latest_score(investment_id: str) -> RiskScoreRecord | None:
    """Get the current score of an investment."""
    async with get_session() as session:
        result = await session.execute(
            select(RiskScoreHistory)
            .where(RiskScoreHistory.investment_id == investment_id)
            .order_by(RiskScoreHistory.created_at.desc(), RiskScoreHistory.id.desc())
            .limit(1)
        )
        row = result.scalar_one_or_none()

    return RiskScoreRecord.model_validate(row) if row is not None else None


async def list_score_history(investment_id: str, limit: int = 50) -> list[RiskScoreRecord]:
    """List score records of an investment, newest first."""
    async with get_session() as session:
        result = await session.execute(
            select(RiskScoreHistory)
            .where(RiskScoreHistory.investment_id == investment_id)
            .order_by(RiskScoreHistory.created_at.desc(), RiskScoreHistory.id.desc())
            .limit(limit)
        )
        rows = result.scalars().all()

    return [RiskScoreRecord.model_validate(row) for row in rows]
