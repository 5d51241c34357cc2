"""Profile compatibility evaluator.

Compares a persisted risk score against an investor profile band:
- inside the band: green
- exactly one point outside: yellow
- two or more points outside: red
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from investrisk.domain.risk import ProfileBand


CompatibilityStatus = Literal["green", "yellow", "red"]


@dataclass(frozen=True)
class CompatibilityEvaluation:
    """Outcome of comparing a score with a profile band."""

    status: CompatibilityStatus
    score: int
    user_profile: str
    profile_min: int
    profile_max: int
    message: str
    compatibility: str


@dataclass(frozen=True)
class RequiresCalculation:
    """No score exists yet for the investment; the caller should compute one."""

    investment_id: str


def evaluate_compatibility(score: int, profile_name: str, band: ProfileBand) -> CompatibilityEvaluation:
    """
    Classify a score against a profile band with one point of leniency.

    Args:
        score: Persisted risk score in [1, 20]
        profile_name: Lower-cased investor profile name used in the message
        band: Closed score band of the profile

    Returns:
        CompatibilityEvaluation with status, label and message
    """
    min_score, max_score = band.min_score, band.max_score

    if band.contains(score):
        status: CompatibilityStatus = "green"
        compatibility = "Compatível"
        message = f"Este investimento está alinhado com seu perfil {profile_name}."
    elif score == min_score - 1 or score == max_score + 1:
        status = "yellow"
        compatibility = "Atenção"
        direction = "conservador" if score < min_score else "arrojado"
        message = f"Este investimento é levemente mais {direction} que seu perfil {profile_name}."
    else:
        status = "red"
        compatibility = "Incompatível"
        if score < min_score:
            message = f"Este investimento é muito mais conservador que seu perfil {profile_name}."
        else:
            message = (
                f"Este investimento é muito mais arrojado que seu perfil {profile_name}. "
                "Considere reavaliar."
            )

    return CompatibilityEvaluation(
        status=status,
        score=score,
        user_profile=profile_name,
        profile_min=min_score,
        profile_max=max_score,
        message=message,
        compatibility=compatibility,
    )
