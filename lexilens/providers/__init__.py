"""Generative-AI providers reachable by the relay and the enrichment job."""

from enum import Enum
from typing import Dict, Optional

import config
from lexilens.providers.base import Provider


class ProviderName(str, Enum):
    """Provider selectors accepted by the relay, in comparison order."""

    GEMINI = "GEMINI"
    MIXTRAL = "MIXTRAL"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ProviderName"]:
        """Resolve a case-insensitive selector, or None if it is not recognized."""
        if not value:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


def build_providers() -> Dict[ProviderName, Provider]:
    """
    Create every configured provider from environment credentials.

    Raises:
        ConfigError: If a required API key is missing.
    """
    from lexilens.providers.gemini import GeminiProvider
    from lexilens.providers.mistral import MistralProvider

    return {
        ProviderName.GEMINI: GeminiProvider(config.require_env(config.GEMINI_API_KEY_ENV)),
        ProviderName.MIXTRAL: MistralProvider(config.require_env(config.MISTRAL_API_KEY_ENV)),
    }


def build_enrichment_provider() -> Provider:
    """Create the Gemini provider used by the batch enrichment job."""
    from lexilens.providers.gemini import GeminiProvider

    return GeminiProvider(
        config.require_env(config.GEMINI_API_KEY_ENV),
        max_output_tokens=config.ENRICHMENT_MAX_OUTPUT_TOKENS,
        temperature=config.ENRICHMENT_TEMPERATURE,
    )
