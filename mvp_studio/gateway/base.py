# mvp_studio/gateway/base.py
"""Abstract base class for text generation gateways."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationOptions:
    """Sampling options passed through to the provider."""

    max_tokens: int = 4000
    temperature: float = 0.7


@dataclass(frozen=True)
class GenerationResult:
    """Text returned by a gateway."""

    text: str
    provider: str = ""
    model: str = ""


class GenerationGateway(ABC):
    """Abstract base class for text generation gateways."""

    @abstractmethod
    async def generate(self, prompt: str, options: GenerationOptions) -> GenerationResult:
        """
        Generate text for a rendered prompt.

        Args:
            prompt: Fully rendered prompt text
            options: Token budget and temperature

        Returns:
            GenerationResult with the generated text

        Raises:
            Any exception on failure; callers only distinguish success from failure.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Gateway name for logging (e.g., 'openai', 'anthropic')."""
        pass
