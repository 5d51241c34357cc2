"""
Pydantic model for the assisted risk score reply.

A reply that does not validate against this model is discarded whole.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RiskScoreOutput(BaseModel):
    """Structured risk score returned by the reasoning service."""

    model_config = ConfigDict(extra="ignore")

    score: int = Field(ge=1, le=20, description="Risk score from 1 (lowest) to 20 (highest)")
    justification: str = Field(
        min_length=1, description="Technical explanation of the score in 2-3 lines"
    )
    risk_category: Literal["Baixo", "Moderado", "Alto"]
    compatible_with_conservador: bool
    compatible_with_moderado: bool
    compatible_with_arrojado: bool
