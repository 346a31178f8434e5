"""Abstract interface shared by every generative-AI provider."""

from abc import ABC, abstractmethod
from typing import Optional


class Provider(ABC):
    """Abstract base class for generative-AI providers."""

    @abstractmethod
    async def generate(self, prompt: str, image: Optional[bytes] = None) -> str:
        """
        Send a prompt, optionally with a JPEG image, and return the full reply.

        Streamed fragments are concatenated into one string.

        Args:
            prompt: Instruction text.
            image: JPEG bytes for vision requests, or None for text-only.

        Returns:
            The reply text.

        Raises:
            ProviderRateLimitError: If the provider reports a rate limit.
            ProviderError: For any other provider or transport failure.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging/display."""
        pass

    async def aclose(self) -> None:
        """Release any resources held by the provider."""
        return None
