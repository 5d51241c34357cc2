"""Risk indicators repository using SQLAlchemy ORM.

Indicator rows are append-only; there is no update or delete.

Usage:
    from investrisk.repositories import risk_indicators_orm

    stored = await risk_indicators_orm.create_indicators(investment_id, indicators, source)
    same = await risk_indicators_orm.get_indicators(stored.id)
"""

from __future__ import annotations

from investrisk.core.logging import get_logger
from investrisk.database.connection import get_session
from investrisk.database.orm import InvestmentRiskIndicators
from investrisk.domain.risk import IndicatorSet, RiskIndicators


logger = get_logger("repositories.risk_indicators_orm")


def _to_domain(row: InvestmentRiskIndicators) -> RiskIndicators:
    return RiskIndicators(
        id=row.id,
        source_investment_id=row.user_investment_id,
        var_95=row.var_95,
        beta=row.beta,
        sharpe_ratio=row.sharpe_ratio,
        std_deviation=row.std_deviation,
        expected_return=row.expected_return,
        data_source=row.data_source,
        calculated_at=row.calculated_at,
    )


async def create_indicators(
    investment_id: str,
    indicators: IndicatorSet,
    data_source: str,
) -> RiskIndicators:
    """Persist an indicator set for a holding."""
    async with get_session() as session:
        row = InvestmentRiskIndicators(
            user_investment_id=investment_id,
            var_95=indicators.var_95,
            beta=indicators.beta,
            sharpe_ratio=indicators.sharpe_ratio,
            std_deviation=indicators.std_deviation,
            expected_return=indicators.expected_return,
            data_source=data_source,
        )
        session.add(row)
        await session.commit()
        await session.refresh(row)

        logger.debug(
            "Stored indicators",
            extra={"investment_id": investment_id, "risk_indicators_id": row.id},
        )
        return _to_domain(row)


async def get_indicators(indicators_id: int) -> RiskIndicators | None:
    """Get an indicator set by id."""
    async with get_session() as session:
        row = await session.get(InvestmentRiskIndicators, indicators_id)
        return _to_domain(row) if row is not None else None
