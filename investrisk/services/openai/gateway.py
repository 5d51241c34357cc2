"""
Reasoning gateway for the assisted risk score.

Wraps the OpenAI-compatible chat completions endpoint behind a small
protocol so the scoring service can be exercised with a fake in tests.

Errors are mapped to the reasoning-service taxonomy:
- 429 -> ReasoningServiceRateLimited (terminal)
- 402 -> ReasoningServicePaymentRequired (terminal)
- timeout, transport failure, other statuses, missing client
  -> ReasoningServiceUnavailable
- 2xx body that is not a chat completion, or a reply that does not
  validate -> ReasoningServiceMalformedReply
"""

from __future__ import annotations

import asyncio
import json
import re
from typing import Protocol, Sequence

from openai import (
    APIConnectionError,
    APIError,
    APIResponseValidationError,
    APIStatusError,
    RateLimitError,
)
from pydantic import ValidationError

from investrisk.core.exceptions import (
    ReasoningServiceMalformedReply,
    ReasoningServicePaymentRequired,
    ReasoningServiceRateLimited,
    ReasoningServiceUnavailable,
)
from investrisk.core.logging import get_logger
from investrisk.domain.risk import IndicatorSet, ProfileBand
from investrisk.risk.scoring import AssistedScore
from investrisk.services.openai.client import OpenAIClientManager, get_client_manager
from investrisk.services.openai.prompts import build_system_prompt, build_user_prompt
from investrisk.services.openai.schemas import RiskScoreOutput


logger = get_logger("openai.gateway")


_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


# =============================================================================
# Gateway Protocol
# =============================================================================


class ReasoningGateway(Protocol):
    """Protocol for assisted risk score providers."""

    async def assess_risk(
        self,
        indicators: IndicatorSet,
        profile_ranges: Sequence[ProfileBand],
    ) -> AssistedScore:
        """Return a validated assisted score or raise a ReasoningServiceError."""
        ...


# =============================================================================
# Reply parsing
# =============================================================================


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers around a reply."""
    return _FENCE.sub("", _JSON_FENCE.sub("", text)).strip()


def reply_content(response: object) -> str | None:
    """
    Text of the first choice of a completion, or None.

    Gateways that answer with a non-JSON content type make the SDK return
    the raw body instead of a ChatCompletion, and some send
    ``"message": null``; both yield None.
    """
    choices = getattr(response, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None) if message is not None else None
    return content if isinstance(content, str) else None


def parse_reply(content: str | None) -> AssistedScore:
    """
    Parse and validate a raw reply into an AssistedScore.

    Raises:
        ReasoningServiceMalformedReply: reply is empty, not a JSON object,
            or fails validation (including a score outside [1, 20])
    """
    if not content:
        raise ReasoningServiceMalformedReply("Empty reply")

    try:
        data = json.loads(strip_code_fences(content))
    except json.JSONDecodeError as e:
        raise ReasoningServiceMalformedReply(f"Reply is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise ReasoningServiceMalformedReply("Reply is not a JSON object")

    try:
        output = RiskScoreOutput.model_validate(data)
    except ValidationError as e:
        raise ReasoningServiceMalformedReply(
            "Reply failed validation",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e

    return AssistedScore(
        score=output.score,
        justification=output.justification,
        risk_category=output.risk_category,
        compatible_with_conservador=output.compatible_with_conservador,
        compatible_with_moderado=output.compatible_with_moderado,
        compatible_with_arrojado=output.compatible_with_arrojado,
    )


# =============================================================================
# OpenAI Gateway Implementation
# =============================================================================


class OpenAIReasoningGateway:
    """
    Assisted risk scoring through an OpenAI-compatible chat completions API.

    One attempt per call, bounded by ``timeout_seconds``.
    """

    def __init__(self, manager: OpenAIClientManager | None = None):
        self._manager = manager

    async def _get_manager(self) -> OpenAIClientManager:
        if self._manager is None:
            self._manager = await get_client_manager()
        return self._manager

    async def assess_risk(
        self,
        indicators: IndicatorSet,
        profile_ranges: Sequence[ProfileBand],
    ) -> AssistedScore:
        manager = await self._get_manager()
        settings = manager.settings

        client = await manager.get_client()
        if client is None:
            raise ReasoningServiceUnavailable("Reasoning service not configured or circuit open")

        messages = [
            {"role": "system", "content": build_system_prompt(profile_ranges)},
            {"role": "user", "content": build_user_prompt(indicators)},
        ]

        try:
            response = await asyncio.wait_for(
                client.chat.completions.create(
                    model=settings.model,
                    messages=messages,
                    temperature=settings.temperature,
                ),
                timeout=settings.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            manager.record_failure()
            logger.warning(
                f"Reasoning call timed out after {settings.timeout_seconds}s",
                extra={"error_code": ReasoningServiceUnavailable.error_code},
            )
            raise ReasoningServiceUnavailable("Reasoning service timed out") from e
        except RateLimitError as e:
            logger.warning(
                "Reasoning service rate limited",
                extra={"error_code": ReasoningServiceRateLimited.error_code, "upstream_status": 429},
            )
            raise ReasoningServiceRateLimited() from e
        except APIStatusError as e:
            if e.status_code == 402:
                logger.error(
                    "Reasoning service requires payment",
                    extra={"error_code": ReasoningServicePaymentRequired.error_code, "upstream_status": 402},
                )
                raise ReasoningServicePaymentRequired() from e
            if e.status_code == 429:
                raise ReasoningServiceRateLimited() from e
            manager.record_failure()
            logger.warning(
                f"Reasoning service error: {e}",
                extra={"error_code": ReasoningServiceUnavailable.error_code, "upstream_status": e.status_code},
            )
            raise ReasoningServiceUnavailable(
                f"Reasoning service returned {e.status_code}",
                details={"upstream_status": e.status_code},
            ) from e
        except APIConnectionError as e:
            manager.record_failure()
            logger.warning(
                f"Reasoning service connection error: {e}",
                extra={"error_code": ReasoningServiceUnavailable.error_code},
            )
            raise ReasoningServiceUnavailable("Reasoning service unreachable") from e
        except (APIResponseValidationError, json.JSONDecodeError) as e:
            # 2xx whose body is not a chat completion
            manager.record_failure()
            logger.warning(
                f"Reasoning service sent an unreadable response: {e}",
                extra={"error_code": ReasoningServiceMalformedReply.error_code},
            )
            raise ReasoningServiceMalformedReply("Reasoning service response is not a chat completion") from e
        except APIError as e:
            manager.record_failure()
            logger.warning(
                f"Reasoning service error: {e}",
                extra={"error_code": ReasoningServiceUnavailable.error_code},
            )
            raise ReasoningServiceUnavailable("Reasoning service error") from e

        manager.record_success()
        return parse_reply(reply_content(response))
