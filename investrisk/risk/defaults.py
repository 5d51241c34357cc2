"""Hand-calibrated indicator sets per asset category.

Used whenever the reference series is too short or degenerate to compute
indicators empirically. The table is built once at import and is read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from investrisk.domain.risk import AssetType, IndicatorSet


DEFAULT_INDICATORS: Mapping[str, IndicatorSet] = MappingProxyType({
    AssetType.TITULO_PUBLICO.value: IndicatorSet(
        var_95=0.01, beta=0.2, sharpe_ratio=0.9, std_deviation=0.03, expected_return=0.105
    ),
    AssetType.CDB.value: IndicatorSet(
        var_95=0.015, beta=0.25, sharpe_ratio=0.85, std_deviation=0.04, expected_return=0.11
    ),
    AssetType.LCI_LCA.value: IndicatorSet(
        var_95=0.015, beta=0.25, sharpe_ratio=0.85, std_deviation=0.04, expected_return=0.095
    ),
    AssetType.CRI_CRA.value: IndicatorSet(
        var_95=0.025, beta=0.4, sharpe_ratio=0.6, std_deviation=0.06, expected_return=0.13
    ),
    AssetType.DEBENTURE.value: IndicatorSet(
        var_95=0.03, beta=0.5, sharpe_ratio=0.55, std_deviation=0.07, expected_return=0.135
    ),
    AssetType.LETRA_FINANCEIRA.value: IndicatorSet(
        var_95=0.025, beta=0.4, sharpe_ratio=0.65, std_deviation=0.06, expected_return=0.12
    ),
    AssetType.FIDC.value: IndicatorSet(
        var_95=0.06, beta=0.8, sharpe_ratio=0.4, std_deviation=0.12, expected_return=0.15
    ),
    AssetType.FUNDO.value: IndicatorSet(
        var_95=0.08, beta=1.0, sharpe_ratio=0.5, std_deviation=0.15, expected_return=0.16
    ),
})

# Unknown categories get the most conservative non-government-bond entry
FALLBACK_ASSET_TYPE = AssetType.CDB.value


def default_indicators_for(asset_type: str) -> IndicatorSet:
    """Return the default indicator set for an asset category."""
    return DEFAULT_INDICATORS.get(asset_type, DEFAULT_INDICATORS[FALLBACK_ASSET_TYPE])
