# mvp_studio/gateway/openai_gateway.py
"""OpenAI generation gateway."""

import os
from typing import Optional

from openai import AsyncOpenAI

from mvp_studio.gateway.base import GenerationGateway, GenerationOptions, GenerationResult

SYSTEM_PROMPT = "You are an expert product designer who writes prompts for no-code and AI app builders."


class OpenAIGateway(GenerationGateway):
    """OpenAI chat-completions gateway."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4.1-mini",
    ):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model
        self._client = AsyncOpenAI(api_key=self.api_key)

    @property
    def name(self) -> str:
        return "openai"

    async def generate(self, prompt: str, options: GenerationOptions) -> GenerationResult:
        """Generate text using OpenAI."""
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=options.max_tokens,
            temperature=options.temperature,
        )

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise ValueError("OpenAI returned an empty response")
        return GenerationResult(text=content.strip(), provider=self.name, model=self.model)
