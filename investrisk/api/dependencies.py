"""API dependencies for authentication and the reasoning gateway."""

from __future__ import annotations

from fastapi import Header

from investrisk.core.exceptions import UnauthenticatedError
from investrisk.core.security import TokenData, decode_access_token
from investrisk.services.openai.gateway import OpenAIReasoningGateway, ReasoningGateway


__all__ = [
    "get_reasoning_gateway",
    "require_user",
]


def _extract_token(authorization: str | None) -> str | None:
    """Extract JWT token from an Authorization: Bearer header."""
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token
    return None


async def require_user(
    authorization: str | None = Header(default=None),
) -> TokenData:
    """
    Require authenticated user.

    The token subject is the user id used to resolve the investor profile.

    Raises UnauthenticatedError if the token is missing or invalid.
    """
    token = _extract_token(authorization)
    if not token:
        raise UnauthenticatedError(message="Authentication required")

    return decode_access_token(token)


async def get_reasoning_gateway() -> ReasoningGateway:
    """Reasoning gateway used for assisted risk scores."""
    return OpenAIReasoningGateway()
