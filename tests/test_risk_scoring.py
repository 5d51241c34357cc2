"""Tests for the risk score classifier."""

from __future__ import annotations

import itertools

import pytest

from investrisk.domain.risk import IndicatorSet
from investrisk.risk.defaults import DEFAULT_INDICATORS
from investrisk.risk.scoring import (
    FALLBACK_JUSTIFICATION,
    SCORING_BUCKETS,
    AssistedScore,
    DeterministicScore,
    deterministic_score,
    profile_compatibility_for,
    reconcile,
    risk_category_for,
    round_half_up,
    score_deterministically,
)


def _indicators(sharpe=1.5, beta=0.7, var=5.0, std=4.0) -> IndicatorSet:
    return IndicatorSet(
        var_95=var, beta=beta, sharpe_ratio=sharpe, std_deviation=std, expected_return=0.1
    )


class TestDeterministicScore:
    """Tests for deterministic_score."""

    def test_government_bond_default(self):
        # sharpe 0.9 -> 14, beta 0.2 -> 3, var 0.01 -> 3, std 0.03 -> 3
        # 4.2 + 1.05 + 0.75 + 0.3 = 6.3
        assert deterministic_score(DEFAULT_INDICATORS["titulo_publico"]) == 6

    def test_best_case(self):
        assert deterministic_score(_indicators(sharpe=3.0, beta=0.1, var=0.0, std=0.0)) == 3

    def test_worst_case_stays_in_range(self):
        # 5.4 + 6.3 + 4.75 + 1.9 = 18.35
        score = deterministic_score(_indicators(sharpe=-5.0, beta=100.0, var=1e6, std=50.0))
        assert score == 18

    def test_middle_buckets(self):
        # sharpe 1.5 -> 9, beta 0.7 -> 8, var 5 -> 9, std 4 -> 9
        # 2.7 + 2.8 + 2.25 + 0.9 = 8.65
        assert deterministic_score(_indicators()) == 9

    def test_bucket_edges_are_strict(self):
        sharpe = SCORING_BUCKETS["sharpe_ratio"]
        beta = SCORING_BUCKETS["beta"]
        assert sharpe.sub_score(2.0) == 9
        assert sharpe.sub_score(2.01) == 3
        assert sharpe.sub_score(0.5) == 18
        assert beta.sub_score(0.5) == 8
        assert beta.sub_score(1.5) == 18

    def test_nan_sharpe_takes_worst_bucket(self):
        score = deterministic_score(_indicators(sharpe=float("nan")))
        assert 1 <= score <= 20

    def test_always_integer_in_range(self):
        sharpes = [-10.0, 0.0, 0.7, 1.5, 2.5, 50.0]
        betas = [0.0, 0.6, 1.2, 2.0, 100.0]
        magnitudes = [0.0, 4.0, 8.0, 20.0, 1e9]
        for sharpe, beta, var, std in itertools.product(sharpes, betas, magnitudes, magnitudes):
            score = deterministic_score(_indicators(sharpe, beta, var, std))
            assert isinstance(score, int)
            assert 1 <= score <= 20

    def test_weights_sum_to_one(self):
        assert sum(b.weight for b in SCORING_BUCKETS.values()) == pytest.approx(1.0)


class TestRounding:
    """Half-up rounding."""

    @pytest.mark.parametrize(
        "value,expected",
        [(2.5, 3), (6.5, 7), (6.49, 6), (1.0, 1), (19.5, 20)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestDerivedFields:
    """Category and static per-profile compatibility."""

    @pytest.mark.parametrize(
        "score,category",
        [(1, "Baixo"), (8, "Baixo"), (9, "Moderado"), (14, "Moderado"), (15, "Alto"), (20, "Alto")],
    )
    def test_risk_category(self, score, category):
        assert risk_category_for(score) == category

    def test_conservador_boundary(self):
        assert profile_compatibility_for(9)["compatible_with_conservador"] is True
        assert profile_compatibility_for(10)["compatible_with_conservador"] is False

    def test_moderado_boundaries(self):
        assert profile_compatibility_for(5)["compatible_with_moderado"] is False
        assert profile_compatibility_for(6)["compatible_with_moderado"] is True
        assert profile_compatibility_for(15)["compatible_with_moderado"] is True
        assert profile_compatibility_for(16)["compatible_with_moderado"] is False

    def test_arrojado_boundary(self):
        assert profile_compatibility_for(10)["compatible_with_arrojado"] is False
        assert profile_compatibility_for(11)["compatible_with_arrojado"] is True


class TestReconcile:
    """Tests for reconcile."""

    def test_deterministic_is_fallback_with_derived_fields(self):
        assessment = reconcile(DeterministicScore(score=9, justification="x"))

        assert assessment.source == "deterministic"
        assert assessment.fallback_used is True
        assert assessment.risk_category == "Moderado"
        assert assessment.compatible_with_conservador is True
        assert assessment.compatible_with_moderado is True
        assert assessment.compatible_with_arrojado is False

    def test_assisted_passes_through(self):
        assisted = AssistedScore(
            score=4,
            justification="Baixa volatilidade.",
            risk_category="Baixo",
            compatible_with_conservador=True,
            compatible_with_moderado=False,
            compatible_with_arrojado=False,
        )
        assessment = reconcile(assisted)

        assert assessment.source == "assisted"
        assert assessment.fallback_used is False
        assert assessment.score == 4
        assert assessment.justification == "Baixa volatilidade."
        assert assessment.compatible_with_moderado is False


class TestScoreDeterministically:
    """Justification text of the deterministic path."""

    def test_justification(self):
        result = score_deterministically(DEFAULT_INDICATORS["titulo_publico"])

        assert result.score == 6
        assert result.justification.startswith(FALLBACK_JUSTIFICATION)
        assert "Risco Baixo (Score: 6/20)" in result.justification
        assert "Sharpe Ratio: 0.90, Beta: 0.20" in result.justification
        assert "Volatilidade anualizada: 3.00%" in result.justification
