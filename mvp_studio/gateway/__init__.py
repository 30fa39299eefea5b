"""Text generation gateways."""

from typing import Optional

from mvp_studio.config import WizardConfig
from mvp_studio.gateway.base import GenerationGateway, GenerationOptions, GenerationResult
from mvp_studio.gateway.fallback import FallbackGateway


def _make(provider: str, config: WizardConfig) -> GenerationGateway:
    if provider == "openai":
        from mvp_studio.gateway.openai_gateway import OpenAIGateway
        return OpenAIGateway(model=config.openai_model)
    if provider == "anthropic":
        from mvp_studio.gateway.anthropic_gateway import AnthropicGateway
        return AnthropicGateway(model=config.anthropic_model)
    raise ValueError(f"Unknown provider: {provider}")


def build_gateway(config: Optional[WizardConfig] = None) -> GenerationGateway:
    """Build the configured primary/fallback gateway chain."""
    config = config or WizardConfig.from_env()
    primary = _make(config.provider, config)
    fallback = None
    if config.fallback_provider and config.fallback_provider != config.provider:
        fallback = _make(config.fallback_provider, config)
    return FallbackGateway(primary, fallback)


__all__ = [
    "GenerationGateway",
    "GenerationOptions",
    "GenerationResult",
    "FallbackGateway",
    "build_gateway",
]
