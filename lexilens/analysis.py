"""Label analysis and free-text ask against the configured providers."""

import asyncio
from datetime import date
from typing import Dict, Optional

from lexilens.errors import ExtractionError
from lexilens.extract import extract_json_object
from lexilens.logger import get_logger
from lexilens.models import AnalysisResult
from lexilens.prompts import build_analysis_prompt
from lexilens.providers import ProviderName
from lexilens.providers.base import Provider


async def analyze_image(
    provider: Provider, image: bytes, today: Optional[date] = None
) -> AnalysisResult:
    """
    Ask one provider to read dates and identifiers from a preprocessed image.

    Args:
        provider: Vision-capable provider
        image: Preprocessed JPEG bytes
        today: Reference date for the single-date rule (defaults to today)

    Returns:
        The parsed AnalysisResult

    Raises:
        ProviderError: If the provider call fails
        ExtractionError: If the reply contains no JSON object
    """
    prompt = build_analysis_prompt(today or date.today())
    response = await provider.generate(prompt, image=image)

    data = extract_json_object(response)
    if data is None:
        raise ExtractionError(f"No JSON content found in {provider.name} response")
    return AnalysisResult.model_validate(data)


async def _analyze_or_empty(
    provider: Provider, image: bytes, today: Optional[date]
) -> AnalysisResult:
    try:
        return await analyze_image(provider, image, today)
    except Exception as e:
        logger = get_logger()
        logger.warning(f"Comparison: {provider.name} failed, returning empty result: {e}")
        return AnalysisResult.empty()


async def compare_image(
    providers: Dict[ProviderName, Provider], image: bytes, today: Optional[date] = None
) -> list[AnalysisResult]:
    """
    Analyze one image with every provider concurrently.

    A failing provider yields an all-null result in its slot; results follow
    ProviderName order.
    """
    ordered = [providers[name] for name in ProviderName if name in providers]
    return await asyncio.gather(
        *(_analyze_or_empty(provider, image, today) for provider in ordered)
    )


async def ask(provider: Provider, prompt: str) -> str:
    """Forward a free-text prompt and return the raw reply."""
    return await provider.generate(prompt)
