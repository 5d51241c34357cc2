"""
Prompts for the assisted risk score.

The system prompt describes the four-indicator methodology (weights
30/35/25/10) and the current investor profile bands. The user prompt lists
the indicator values and asks for a single JSON object.
"""

from __future__ import annotations

from typing import Sequence

from investrisk.domain.risk import IndicatorSet, ProfileBand


SYSTEM_PROMPT_TEMPLATE = """Você é um especialista em análise de risco de investimentos. Sua tarefa é avaliar o nível de risco de um investimento com base em 4 indicadores financeiros clássicos e atribuir uma nota de 1 a 20.

METODOLOGIA DE ANÁLISE:

1. Índice de Sharpe (Peso 30%):
   - Sharpe > 2.0: Excelente retorno ajustado ao risco (score baixo, 1-5)
   - Sharpe 1.0-2.0: Bom retorno ajustado ao risco (score médio, 6-12)
   - Sharpe 0.5-1.0: Retorno moderado para o risco (score médio-alto, 13-16)
   - Sharpe < 0.5: Retorno insuficiente para o risco (score alto, 17-20)

2. Beta (Peso 35%):
   - Beta < 0.5: Muito menos volátil que o mercado (score baixo, 1-5)
   - Beta 0.5-1.0: Menos volátil que o mercado (score médio-baixo, 6-10)
   - Beta 1.0-1.5: Mais volátil que o mercado (score médio-alto, 11-15)
   - Beta > 1.5: Muito mais volátil que o mercado (score alto, 16-20)

3. Value at Risk - VaR 95% (Peso 25%):
   - VaR < 3%: Perda potencial baixa (score baixo, 1-5)
   - VaR 3-7%: Perda potencial moderada (score médio, 6-12)
   - VaR 7-12%: Perda potencial alta (score médio-alto, 13-17)
   - VaR > 12%: Perda potencial muito alta (score alto, 18-20)

4. Desvio Padrão (Peso 10%):
   - Desvio < 3%: Volatilidade muito baixa (score baixo, 1-5)
   - Desvio 3-6%: Volatilidade moderada (score médio, 6-12)
   - Desvio 6-10%: Volatilidade alta (score médio-alto, 13-17)
   - Desvio > 10%: Volatilidade muito alta (score alto, 18-20)

PERFIS DE INVESTIDOR (referência):
{profiles}

FORMATO DE RESPOSTA (JSON):
{{
  "score": número de 1 a 20,
  "justification": "Explicação técnica de 2-3 linhas sobre o score",
  "risk_category": "Baixo" | "Moderado" | "Alto",
  "compatible_with_conservador": true/false,
  "compatible_with_moderado": true/false,
  "compatible_with_arrojado": true/false
}}"""


USER_PROMPT_TEMPLATE = """Analise os seguintes indicadores de risco e retorne SOMENTE um JSON válido (sem markdown, sem explicações adicionais):

Sharpe Ratio: {sharpe_ratio}
Beta: {beta}
VaR 95%: {var_95}%
Desvio Padrão: {std_deviation}%

Lembre-se:
- Score 1-8: Perfil Conservador
- Score 7-14: Perfil Moderado
- Score 12-20: Perfil Arrojado

Retorne apenas o JSON."""


def format_profile_bands(profile_ranges: Sequence[ProfileBand]) -> str:
    """Render profile bands as 'name: scores min-max' joined by commas."""
    return ", ".join(
        f"{band.profile_name}: scores {band.min_score}-{band.max_score}"
        for band in profile_ranges
    )


def build_system_prompt(profile_ranges: Sequence[ProfileBand]) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(profiles=format_profile_bands(profile_ranges))


def build_user_prompt(indicators: IndicatorSet) -> str:
    return USER_PROMPT_TEMPLATE.format(
        sharpe_ratio=indicators.sharpe_ratio,
        beta=indicators.beta,
        var_95=indicators.var_95,
        std_deviation=indicators.std_deviation,
    )
