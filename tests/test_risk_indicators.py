"""Tests for the risk indicator calculator."""

from __future__ import annotations

import math
from dataclasses import astuple

import numpy as np
import pytest

from investrisk.core.exceptions import DegenerateSeriesError
from investrisk.domain.risk import HistoricalPoint
from investrisk.risk.config import RiskModelConfig
from investrisk.risk.defaults import DEFAULT_INDICATORS, default_indicators_for
from investrisk.risk.indicators import (
    compute_indicators,
    extract_returns,
    indicators_from_returns,
)


class TestHistoricalPointValue:
    """Per-period value selection."""

    def test_prefers_indicative_rate(self):
        point = HistoricalPoint(indicative_rate=10.5, unit_price=1000.0)
        assert point.value == 10.5

    def test_falls_back_to_unit_price_when_rate_missing(self):
        point = HistoricalPoint(indicative_rate=None, unit_price=1000.0)
        assert point.value == 1000.0

    def test_falls_back_to_unit_price_when_rate_zero(self):
        point = HistoricalPoint(indicative_rate=0.0, unit_price=1000.0)
        assert point.value == 1000.0

    def test_zero_when_both_missing(self):
        assert HistoricalPoint().value == 0.0


class TestExtractReturns:
    """Tests for extract_returns."""

    def test_pairs_current_with_previous(self):
        # Newest first: 11 follows 10
        returns = extract_returns([11.0, 10.0])
        assert returns.tolist() == pytest.approx([0.1])

    def test_skips_non_positive_pairs(self):
        returns = extract_returns([10.0, 0.0, 10.0, -5.0, 10.0, 12.5])
        # Only (10.0, 12.5) is a valid pair
        assert returns.tolist() == pytest.approx([(10.0 - 12.5) / 12.5])

    def test_single_value_has_no_returns(self):
        assert len(extract_returns([10.0])) == 0

    def test_empty_series(self):
        assert len(extract_returns([])) == 0


class TestComputeIndicators:
    """Tests for compute_indicators."""

    def test_six_point_series_is_computed(self, make_points, sample_rates):
        result = compute_indicators(make_points(sample_rates), "debenture", 10_000.0)

        assert result.computed is True
        assert result.returns_count == 5
        assert result.data_points == 6

    def test_formulas(self, make_points, sample_rates):
        amount = 10_000.0
        result = compute_indicators(make_points(sample_rates), "debenture", amount)

        values = np.array(sample_rates)
        returns = (values[:-1] - values[1:]) / values[1:]
        mean = returns.mean()
        std = returns.std()
        annual_return = mean * 252
        annual_std = std * math.sqrt(252)

        ind = result.indicators
        assert ind.expected_return == pytest.approx(annual_return)
        assert ind.std_deviation == pytest.approx(annual_std)
        assert ind.var_95 == pytest.approx(abs(mean - 1.645 * std) * amount)
        assert ind.beta == pytest.approx(annual_std / 0.15)
        assert ind.sharpe_ratio == pytest.approx((annual_return - 0.105) / annual_std)

    def test_non_negative_indicators(self, make_points, sample_rates):
        ind = compute_indicators(make_points(sample_rates), "cri_cra", 500.0).indicators
        assert ind.var_95 >= 0
        assert ind.beta >= 0
        assert ind.std_deviation >= 0

    def test_three_points_always_default(self, make_points):
        for rates in ([10.0, 50.0, 1.0], [1.0, 1.0, 1.0], [99.0, 10.0, 0.5]):
            result = compute_indicators(make_points(rates), "debenture", 1000.0)
            assert result.computed is False
            assert result.indicators == DEFAULT_INDICATORS["debenture"]

    def test_too_few_valid_returns_is_default(self, make_points):
        # Six points but one zero kills two pairs: 3 valid returns
        result = compute_indicators(
            make_points([10.0, 10.1, 0.0, 10.2, 10.3, 10.4]), "fidc", 1000.0
        )
        assert result.returns_count == 3
        assert result.indicators == DEFAULT_INDICATORS["fidc"]

    def test_fund_skips_return_extraction(self, make_points, sample_rates):
        result = compute_indicators(make_points(sample_rates * 3), "fundo", 1000.0)
        assert result.computed is False
        assert result.returns_count == 0
        assert result.indicators == DEFAULT_INDICATORS["fundo"]

    def test_unknown_type_aliases_to_cdb(self, make_points):
        result = compute_indicators(make_points([10.0]), "poupanca", 1000.0)
        assert result.indicators == DEFAULT_INDICATORS["cdb"]

    def test_constant_series_falls_back_to_default(self, make_points):
        result = compute_indicators(make_points([10.0] * 10), "titulo_publico", 1000.0)

        assert result.computed is False
        assert result.returns_count == 9
        assert result.indicators == DEFAULT_INDICATORS["titulo_publico"]
        assert math.isfinite(result.indicators.sharpe_ratio)

    def test_overflowing_var_falls_back_to_default(self, make_points):
        result = compute_indicators(make_points([10.0, 50.0] * 3), "debenture", 1e308)

        assert result.computed is False
        assert result.returns_count == 5
        assert result.indicators == DEFAULT_INDICATORS["debenture"]

    def test_infinite_amount_falls_back_to_default(self, make_points, sample_rates):
        result = compute_indicators(make_points(sample_rates), "debenture", float("inf"))

        assert result.computed is False
        assert all(math.isfinite(v) for v in astuple(result.indicators))

    def test_non_finite_indicator_is_degenerate(self, sample_rates):
        returns = extract_returns(sample_rates)
        with pytest.raises(DegenerateSeriesError):
            indicators_from_returns(returns, float("inf"), RiskModelConfig())

    def test_consumes_at_most_history_limit(self, make_points):
        rates = [10.0 + (i % 3) * 0.05 for i in range(40)]
        result = compute_indicators(make_points(rates), "debenture", 1000.0)

        assert result.data_points == 30
        assert result.returns_count == 29

    def test_custom_config(self, make_points, sample_rates):
        config = RiskModelConfig(min_returns=6)
        result = compute_indicators(make_points(sample_rates), "debenture", 1000.0, config)
        assert result.computed is False


class TestDefaultIndicators:
    """Tests for the default indicator table."""

    def test_eight_categories(self):
        assert set(DEFAULT_INDICATORS) == {
            "titulo_publico", "cdb", "lci_lca", "cri_cra",
            "debenture", "letra_financeira", "fidc", "fundo",
        }

    def test_government_bond_entry(self):
        entry = default_indicators_for("titulo_publico")
        assert entry.var_95 == 0.01
        assert entry.beta == 0.2
        assert entry.sharpe_ratio == 0.9
        assert entry.std_deviation == 0.03
        assert entry.expected_return == 0.105

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_INDICATORS["cdb"] = DEFAULT_INDICATORS["fidc"]

    def test_entries_are_frozen(self):
        from dataclasses import FrozenInstanceError

        with pytest.raises(FrozenInstanceError):
            DEFAULT_INDICATORS["cdb"].beta = 5.0
