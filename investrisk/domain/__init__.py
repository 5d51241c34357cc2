"""Domain models passed between repositories, the risk pipeline and the API.

Usage:
    from investrisk.domain import HistoricalPoint, IndicatorSet, RiskScoreRecord
"""

from investrisk.domain.risk import (
    AssetType,
    HistoricalPoint,
    IndicatorSet,
    ProfileBand,
    RiskCategory,
    RiskIndicators,
    RiskScoreRecord,
)

__all__ = [
    "AssetType",
    "HistoricalPoint",
    "IndicatorSet",
    "ProfileBand",
    "RiskCategory",
    "RiskIndicators",
    "RiskScoreRecord",
]
