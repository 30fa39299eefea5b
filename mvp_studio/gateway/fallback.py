"""Fallback gateway - tries providers in order."""

import logging
from typing import Optional

from mvp_studio.errors import GatewayError
from mvp_studio.gateway.base import GenerationGateway, GenerationOptions, GenerationResult

logger = logging.getLogger(__name__)


class FallbackGateway(GenerationGateway):
    """
    Chains a primary and an optional fallback gateway.

    Flow:
    1. Try primary gateway
    2. Try fallback gateway
    3. Raise GatewayError if both fail (never fabricate text)
    """

    def __init__(self, primary: GenerationGateway, fallback: Optional[GenerationGateway] = None):
        self.primary = primary
        self.fallback = fallback

    @property
    def name(self) -> str:
        if self.fallback is None:
            return self.primary.name
        return f"{self.primary.name}+{self.fallback.name}"

    async def generate(self, prompt: str, options: GenerationOptions) -> GenerationResult:
        """Generate text, falling back on primary failure."""
        errors = []
        for gateway in (self.primary, self.fallback):
            if gateway is None:
                continue
            try:
                logger.info(f"Calling gateway: {gateway.name}")
                return await gateway.generate(prompt, options)
            except Exception as e:
                logger.warning(f"Gateway ({gateway.name}) failed: {e}")
                errors.append(f"{gateway.name}: {e}")

        raise GatewayError(f"All gateways failed - {'; '.join(errors)}", provider=self.name)
