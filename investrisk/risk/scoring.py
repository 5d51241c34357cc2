"""Risk score classifier.

Two scoring strategies produce an integer score in [1, 20]:

- DeterministicScore: weighted bucket formula over the four indicators
  (Sharpe 30%, beta 35%, VaR 25%, std deviation 10%).
- AssistedScore: structured reply of the external reasoning service.

reconcile() normalizes either one into a ScoreAssessment. Assisted replies
are validated before they get here; anything invalid is replaced by the
deterministic result upstream.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping, Union

from investrisk.domain.risk import IndicatorSet, RiskCategory


MIN_SCORE = 1
MAX_SCORE = 20


@dataclass(frozen=True)
class IndicatorBuckets:
    """Bucket edges for one indicator.

    ``edges`` is an ordered tuple of (threshold, sub_score). When
    ``ascending`` is True a value below a threshold takes its sub-score,
    otherwise a value above it does. Values matching no edge take
    ``otherwise``.
    """

    edges: tuple[tuple[float, int], ...]
    otherwise: int
    weight: float
    ascending: bool = True

    def sub_score(self, value: float) -> int:
        for threshold, score in self.edges:
            if self.ascending and value < threshold:
                return score
            if not self.ascending and value > threshold:
                return score
        return self.otherwise


# Thresholds compare raw indicator values
SCORING_BUCKETS: Mapping[str, IndicatorBuckets] = MappingProxyType({
    "sharpe_ratio": IndicatorBuckets(
        edges=((2.0, 3), (1.0, 9), (0.5, 14)), otherwise=18, weight=0.30, ascending=False
    ),
    "beta": IndicatorBuckets(
        edges=((0.5, 3), (1.0, 8), (1.5, 13)), otherwise=18, weight=0.35
    ),
    "var_95": IndicatorBuckets(
        edges=((3.0, 3), (7.0, 9), (12.0, 15)), otherwise=19, weight=0.25
    ),
    "std_deviation": IndicatorBuckets(
        edges=((3.0, 3), (6.0, 9), (10.0, 15)), otherwise=19, weight=0.10
    ),
})

FALLBACK_JUSTIFICATION = (
    "Score calculado com base em análise determinística dos indicadores de risco "
    "(Sharpe, Beta, VaR e Desvio Padrão)."
)


# =============================================================================
# SCORE VARIANTS
# =============================================================================


@dataclass(frozen=True)
class DeterministicScore:
    """Score produced locally by the weighted bucket formula."""

    score: int
    justification: str


@dataclass(frozen=True)
class AssistedScore:
    """Validated score produced by the reasoning service."""

    score: int
    justification: str
    risk_category: RiskCategory
    compatible_with_conservador: bool
    compatible_with_moderado: bool
    compatible_with_arrojado: bool


ScoreResult = Union[DeterministicScore, AssistedScore]


@dataclass(frozen=True)
class ScoreAssessment:
    """Normalized score ready to be persisted."""

    score: int
    justification: str
    risk_category: RiskCategory
    compatible_with_conservador: bool
    compatible_with_moderado: bool
    compatible_with_arrojado: bool
    source: Literal["deterministic", "assisted"]

    @property
    def fallback_used(self) -> bool:
        return self.source == "deterministic"


# =============================================================================
# DETERMINISTIC PATH
# =============================================================================


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return math.floor(value + 0.5)


def deterministic_score(indicators: IndicatorSet) -> int:
    """
    Compute the weighted bucket score of an indicator set.

    Returns:
        Integer score clamped to [1, 20]
    """
    total = sum(
        buckets.sub_score(getattr(indicators, name)) * buckets.weight
        for name, buckets in SCORING_BUCKETS.items()
    )
    clamped = max(float(MIN_SCORE), min(float(MAX_SCORE), total))
    return round_half_up(clamped)


def risk_category_for(score: int) -> RiskCategory:
    if score <= 8:
        return "Baixo"
    if score <= 14:
        return "Moderado"
    return "Alto"


def profile_compatibility_for(score: int) -> dict[str, bool]:
    """Static per-profile compatibility flags of a score."""
    return {
        "compatible_with_conservador": score <= 9,
        "compatible_with_moderado": 6 <= score <= 15,
        "compatible_with_arrojado": score >= 11,
    }


def describe_indicators(indicators: IndicatorSet, score: int) -> str:
    """Human-readable summary of the indicators behind a score."""
    category = risk_category_for(score)
    return (
        f"Risco {category} (Score: {score}/20). "
        f"Sharpe Ratio: {indicators.sharpe_ratio:.2f}, Beta: {indicators.beta:.2f}, "
        f"Volatilidade anualizada: {indicators.std_deviation * 100:.2f}%. "
        f"VaR 95%: R$ {indicators.var_95:.2f} por dia de negociação."
    )


def score_deterministically(indicators: IndicatorSet) -> DeterministicScore:
    """Build the deterministic score variant with its justification."""
    score = deterministic_score(indicators)
    return DeterministicScore(
        score=score,
        justification=f"{FALLBACK_JUSTIFICATION} {describe_indicators(indicators, score)}",
    )


# =============================================================================
# RECONCILIATION
# =============================================================================


def reconcile(result: ScoreResult) -> ScoreAssessment:
    """Normalize either score variant into a ScoreAssessment."""
    if isinstance(result, AssistedScore):
        return ScoreAssessment(
            score=result.score,
            justification=result.justification,
            risk_category=result.risk_category,
            compatible_with_conservador=result.compatible_with_conservador,
            compatible_with_moderado=result.compatible_with_moderado,
            compatible_with_arrojado=result.compatible_with_arrojado,
            source="assisted",
        )

    return ScoreAssessment(
        score=result.score,
        justification=result.justification,
        risk_category=risk_category_for(result.score),
        source="deterministic",
        **profile_compatibility_for(result.score),
    )
