"""Risk domain models.

Type-safe representations of the records that flow through the scoring
pipeline: reference series points, indicator sets, persisted indicators,
score records and investor profile bands.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as DateType
from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


RiskCategory = Literal["Baixo", "Moderado", "Alto"]


class AssetType(str, Enum):
    """Asset categories known to the indicator defaults table."""
    TITULO_PUBLICO = "titulo_publico"
    CDB = "cdb"
    LCI_LCA = "lci_lca"
    CRI_CRA = "cri_cra"
    DEBENTURE = "debenture"
    LETRA_FINANCEIRA = "letra_financeira"
    FIDC = "fidc"
    FUNDO = "fundo"


class HistoricalPoint(BaseModel):
    """One reference value of an asset for one period."""

    reference_date: DateType | None = Field(None, description="Reference date of the quote")
    indicative_rate: float | None = Field(None, description="ANBIMA indicative rate")
    unit_price: float | None = Field(None, description="Unit price (PU)")

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> float:
        """Indicative rate, or the unit price when the rate is missing or zero."""
        return self.indicative_rate or self.unit_price or 0.0


@dataclass(frozen=True)
class IndicatorSet:
    """The five statistical risk indicators of a holding."""
    var_95: float
    beta: float
    sharpe_ratio: float
    std_deviation: float
    expected_return: float


class RiskIndicators(BaseModel):
    """A persisted indicator set."""

    id: int
    source_investment_id: str
    var_95: float = Field(..., ge=0)
    beta: float = Field(..., ge=0)
    sharpe_ratio: float
    std_deviation: float = Field(..., ge=0)
    expected_return: float
    data_source: str
    calculated_at: datetime | None = None

    model_config = ConfigDict(frozen=True)

    def to_indicator_set(self) -> IndicatorSet:
        return IndicatorSet(
            var_95=self.var_95,
            beta=self.beta,
            sharpe_ratio=self.sharpe_ratio,
            std_deviation=self.std_deviation,
            expected_return=self.expected_return,
        )


class RiskScoreRecord(BaseModel):
    """A persisted score. Records are append-only."""

    id: int
    investment_id: str
    risk_indicators_id: int
    score: int = Field(..., ge=1, le=20)
    justification: str
    risk_category: RiskCategory
    compatible_with_conservador: bool
    compatible_with_moderado: bool
    compatible_with_arrojado: bool
    fallback_used: bool = False
    created_at: datetime | None = None

    model_config = ConfigDict(frozen=True, from_attributes=True)


class ProfileBand(BaseModel):
    """Closed integer score interval of an investor profile."""

    profile_name: str
    min_score: int = Field(..., ge=1, le=20)
    max_score: int = Field(..., ge=1, le=20)
    description: str | None = None

    model_config = ConfigDict(frozen=True, from_attributes=True)

    def contains(self, score: int) -> bool:
        return self.min_score <= score <= self.max_score
