"""Risk indicator calculator.

Reduces a descending-by-date series of reference values into five
statistical indicators:
- VaR 95% scaled by the invested amount
- beta against a reference market volatility
- Sharpe ratio against the risk-free reference
- annualized standard deviation
- annualized expected return

Short or degenerate series fall back to the default indicator table.
"""

from __future__ import annotations

import math
from dataclasses import astuple, dataclass
from typing import Sequence

import numpy as np

from investrisk.core.exceptions import DegenerateSeriesError
from investrisk.core.logging import get_logger
from investrisk.domain.risk import AssetType, HistoricalPoint, IndicatorSet

from .config import RiskModelConfig, get_risk_config
from .defaults import default_indicators_for


logger = get_logger("risk.indicators")


@dataclass(frozen=True)
class IndicatorComputation:
    """Result of one calculator run."""

    indicators: IndicatorSet
    computed: bool  # False when the default table was used
    returns_count: int
    data_points: int


def extract_returns(values: Sequence[float]) -> np.ndarray:
    """
    Compute simple period returns from a descending-by-date value series.

    Each adjacent pair (current, previous) yields
    ``(current - previous) / previous``. Pairs where either value is not
    strictly positive are skipped.

    Args:
        values: Reference values, newest first

    Returns:
        Array of valid returns (at most len(values) - 1)
    """
    if len(values) < 2:
        return np.array([], dtype=float)

    arr = np.asarray(values, dtype=float)
    current = arr[:-1]
    previous = arr[1:]
    valid = (current > 0) & (previous > 0)
    return (current[valid] - previous[valid]) / previous[valid]


def indicators_from_returns(
    returns: np.ndarray,
    investment_amount: float,
    config: RiskModelConfig,
) -> IndicatorSet:
    """
    Compute the indicator set from a return series.

    Uses population variance. Raises DegenerateSeriesError when the
    annualized standard deviation is zero, since the Sharpe ratio is then
    undefined, or when any indicator overflows to a non-finite value.
    """
    mean_return = float(np.mean(returns))
    std = float(np.std(returns))

    annualized_return = mean_return * config.periods_per_year
    annualized_std = std * math.sqrt(config.periods_per_year)

    if annualized_std == 0 or not math.isfinite(annualized_std):
        raise DegenerateSeriesError(
            f"Zero volatility across {len(returns)} returns, Sharpe ratio undefined"
        )

    var_95 = abs(mean_return - config.var_z_score * std) * investment_amount
    beta = annualized_std / config.market_volatility
    sharpe_ratio = (annualized_return - config.risk_free_rate) / annualized_std

    indicators = IndicatorSet(
        var_95=var_95,
        beta=beta,
        sharpe_ratio=sharpe_ratio,
        std_deviation=annualized_std,
        expected_return=annualized_return,
    )
    if not all(math.isfinite(v) for v in astuple(indicators)):
        raise DegenerateSeriesError(f"Non-finite indicator from {len(returns)} returns")
    return indicators


def compute_indicators(
    points: Sequence[HistoricalPoint],
    asset_type: str,
    investment_amount: float,
    config: RiskModelConfig | None = None,
) -> IndicatorComputation:
    """
    Compute risk indicators for a holding.

    Args:
        points: Reference points ordered newest first
        asset_type: Asset category (titulo_publico, debenture, fundo, ...)
        investment_amount: Invested amount used to scale the VaR
        config: Optional model constants (defaults to environment config)

    Returns:
        IndicatorComputation with either computed or default indicators
    """
    if config is None:
        config = get_risk_config()

    points = list(points)[: config.history_limit]

    # Fund NAV series are not supported yet
    if asset_type == AssetType.FUNDO.value:
        return IndicatorComputation(
            indicators=default_indicators_for(asset_type),
            computed=False,
            returns_count=0,
            data_points=len(points),
        )

    returns = extract_returns([p.value for p in points])

    if len(returns) < config.min_returns:
        logger.info(
            f"Only {len(returns)} valid returns, using default indicators",
            extra={"asset_type": asset_type, "returns_count": len(returns)},
        )
        return IndicatorComputation(
            indicators=default_indicators_for(asset_type),
            computed=False,
            returns_count=len(returns),
            data_points=len(points),
        )

    try:
        indicators = indicators_from_returns(returns, investment_amount, config)
    except DegenerateSeriesError as e:
        logger.warning(
            f"Degenerate series ({e}), using default indicators",
            extra={"asset_type": asset_type, "returns_count": len(returns)},
        )
        return IndicatorComputation(
            indicators=default_indicators_for(asset_type),
            computed=False,
            returns_count=len(returns),
            data_points=len(points),
        )

    return IndicatorComputation(
        indicators=indicators,
        computed=True,
        returns_count=len(returns),
        data_points=len(points),
    )
