"""Business logic services."""

from . import risk_assessment


__all__ = [
    "risk_assessment",
]
