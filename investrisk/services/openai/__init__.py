"""
OpenAI Client Package - reasoning service access for the assisted risk score.

Usage:
    from investrisk.services.openai import (
        OpenAIReasoningGateway,
        ReasoningGateway,
        get_client_manager,
    )

    gateway = OpenAIReasoningGateway()
    assisted = await gateway.assess_risk(indicators, profile_ranges)
"""

from investrisk.services.openai.client import (
    CircuitBreakerState,
    OpenAIClientManager,
    close_client_manager,
    get_client_manager,
)
from investrisk.services.openai.config import OpenAISettings, get_settings
from investrisk.services.openai.gateway import (
    OpenAIReasoningGateway,
    ReasoningGateway,
    parse_reply,
    reply_content,
    strip_code_fences,
)
from investrisk.services.openai.prompts import build_system_prompt, build_user_prompt
from investrisk.services.openai.schemas import RiskScoreOutput


__all__ = [
    # Client
    "CircuitBreakerState",
    "OpenAIClientManager",
    "close_client_manager",
    "get_client_manager",
    # Configuration
    "OpenAISettings",
    "get_settings",
    # Gateway
    "OpenAIReasoningGateway",
    "ReasoningGateway",
    "parse_reply",
    "reply_content",
    "strip_code_fences",
    # Prompts
    "build_system_prompt",
    "build_user_prompt",
    # Schemas
    "RiskScoreOutput",
]
