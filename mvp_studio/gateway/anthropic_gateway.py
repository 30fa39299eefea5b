# mvp_studio/gateway/anthropic_gateway.py
"""Anthropic Claude generation gateway."""

import os
from typing import Optional

from anthropic import AsyncAnthropic

from mvp_studio.gateway.base import GenerationGateway, GenerationOptions, GenerationResult
from mvp_studio.gateway.openai_gateway import SYSTEM_PROMPT


class AnthropicGateway(GenerationGateway):
    """Anthropic Claude messages gateway."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-haiku-4-5-20251001",
    ):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model
        self._client = AsyncAnthropic(api_key=self.api_key)

    @property
    def name(self) -> str:
        return "anthropic"

    async def generate(self, prompt: str, options: GenerationOptions) -> GenerationResult:
        """Generate text using Anthropic Claude."""
        response = await self._client.messages.create(
            model=self.model,
            max_tokens=options.max_tokens,
            messages=[
                {"role": "user", "content": prompt},
            ],
            system=SYSTEM_PROMPT,
            temperature=options.temperature,
        )

        content = "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        ).strip()
        if not content:
            raise ValueError("Anthropic returned an empty response")
        return GenerationResult(text=content, provider=self.name, model=self.model)
