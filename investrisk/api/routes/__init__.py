"""API routes package."""

from . import health, risk


__all__ = [
    "health",
    "risk",
]
