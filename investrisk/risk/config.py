"""Risk model configuration.

Statistical constants of the indicator calculator, loaded from environment
with defaults calibrated for Brazilian fixed income (252 trading days,
10.5% annual risk-free reference).
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class RiskSettings(BaseSettings):
    """Risk model settings from environment."""

    model_config = ConfigDict(extra="ignore")

    risk_history_limit: int = Field(
        default=30, ge=2, le=500, description="Maximum reference points consumed per run"
    )
    risk_min_returns: int = Field(
        default=5, ge=2, le=100, description="Minimum valid returns before computing"
    )
    risk_periods_per_year: int = Field(
        default=252, ge=1, description="Trading periods used to annualize"
    )
    risk_market_volatility: float = Field(
        default=0.15, gt=0, description="Reference market volatility for beta"
    )
    risk_free_rate: float = Field(
        default=0.105, description="Annual risk-free rate reference for Sharpe"
    )
    risk_var_z_score: float = Field(
        default=1.645, gt=0, description="One-tailed z-score of the 95% VaR"
    )


@dataclass(frozen=True)
class RiskModelConfig:
    """Immutable constants of the indicator calculator."""

    history_limit: int = 30
    min_returns: int = 5
    periods_per_year: int = 252
    market_volatility: float = 0.15
    risk_free_rate: float = 0.105
    var_z_score: float = 1.645

    @classmethod
    def from_settings(cls, settings: RiskSettings | None = None) -> RiskModelConfig:
        """Create config from settings."""
        if settings is None:
            settings = RiskSettings()

        return cls(
            history_limit=settings.risk_history_limit,
            min_returns=settings.risk_min_returns,
            periods_per_year=settings.risk_periods_per_year,
            market_volatility=settings.risk_market_volatility,
            risk_free_rate=settings.risk_free_rate,
            var_z_score=settings.risk_var_z_score,
        )


@lru_cache
def get_risk_config() -> RiskModelConfig:
    """Get cached risk model configuration."""
    return RiskModelConfig.from_settings()
