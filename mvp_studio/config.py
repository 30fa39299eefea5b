# mvp_studio/config.py
"""Configuration for wizard runs."""

import os
from dataclasses import dataclass
from typing import Optional

# Minimum length of the vision text before setup can complete
MIN_VISION_LENGTH = 20


@dataclass
class WizardConfig:
    """Configuration for the wizard and its generation gateway."""

    # Providers
    provider: str = "openai"
    fallback_provider: Optional[str] = "anthropic"
    openai_model: str = "gpt-4.1-mini"
    anthropic_model: str = "claude-haiku-4-5-20251001"

    # Generation options
    max_tokens: int = 4000
    temperature: float = 0.7

    # Timeouts (seconds)
    gateway_timeout: float = 120.0

    # Recommendations
    recommendation_limit: int = 3
    rules_version: str = "tool_fit_v1"

    @classmethod
    def from_env(cls) -> "WizardConfig":
        """Create configuration from environment variables."""
        fallback = os.environ.get("MVP_STUDIO_FALLBACK_PROVIDER", "anthropic")
        return cls(
            provider=os.environ.get("MVP_STUDIO_PROVIDER", "openai"),
            fallback_provider=fallback or None,
            openai_model=os.environ.get("MVP_STUDIO_OPENAI_MODEL", "gpt-4.1-mini"),
            anthropic_model=os.environ.get("MVP_STUDIO_ANTHROPIC_MODEL", "claude-haiku-4-5-20251001"),
            max_tokens=int(os.environ.get("MVP_STUDIO_MAX_TOKENS", 4000)),
            temperature=float(os.environ.get("MVP_STUDIO_TEMPERATURE", 0.7)),
            gateway_timeout=float(os.environ.get("MVP_STUDIO_GATEWAY_TIMEOUT_SECONDS", 120)),
            recommendation_limit=int(os.environ.get("MVP_STUDIO_RECOMMENDATION_LIMIT", 3)),
            rules_version=os.environ.get("MVP_STUDIO_RULES_VERSION", "tool_fit_v1"),
        )
