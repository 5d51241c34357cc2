"""Risk pipeline: indicator calculator, score classifier and compatibility evaluator.

Usage:
    from investrisk.risk import compute_indicators, deterministic_score, evaluate_compatibility

    computation = compute_indicators(points, "debenture", 10_000.0)
    score = deterministic_score(computation.indicators)
"""

from .compatibility import (
    CompatibilityEvaluation,
    RequiresCalculation,
    evaluate_compatibility,
)
from .config import RiskModelConfig, RiskSettings, get_risk_config
from .defaults import DEFAULT_INDICATORS, default_indicators_for
from .indicators import IndicatorComputation, compute_indicators, extract_returns
from .scoring import (
    AssistedScore,
    DeterministicScore,
    ScoreAssessment,
    ScoreResult,
    deterministic_score,
    reconcile,
    score_deterministically,
)


__all__ = [
    # Calculator
    "IndicatorComputation",
    "compute_indicators",
    "extract_returns",
    # Defaults
    "DEFAULT_INDICATORS",
    "default_indicators_for",
    # Config
    "RiskModelConfig",
    "RiskSettings",
    "get_risk_config",
    # Scoring
    "AssistedScore",
    "DeterministicScore",
    "ScoreAssessment",
    "ScoreResult",
    "deterministic_score",
    "reconcile",
    "score_deterministically",
    # Compatibility
    "CompatibilityEvaluation",
    "RequiresCalculation",
    "evaluate_compatibility",
]
