"""Gemini provider backed by the google-generativeai SDK."""

from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from google.generativeai.types import HarmBlockThreshold, HarmCategory

import config
from lexilens.errors import ProviderError, ProviderRateLimitError
from lexilens.providers.base import Provider

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_NONE,
}


class GeminiProvider(Provider):
    """Gemini text and vision provider."""

    def __init__(
        self,
        api_key: str,
        model_name: str = config.GEMINI_MODEL,
        max_output_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ):
        """
        Initialize the Gemini provider.

        Args:
            api_key: Gemini API key.
            model_name: Model to call.
            max_output_tokens: Optional output cap (None for the model default).
            temperature: Optional sampling temperature (None for the model default).
        """
        genai.configure(api_key=api_key)
        generation_config = {}
        if max_output_tokens is not None:
            generation_config["max_output_tokens"] = max_output_tokens
        if temperature is not None:
            generation_config["temperature"] = temperature
        self._model = genai.GenerativeModel(
            model_name,
            generation_config=generation_config,
            safety_settings=SAFETY_SETTINGS,
        )

    @property
    def name(self) -> str:
        return "GEMINI"

    async def generate(self, prompt: str, image: Optional[bytes] = None) -> str:
        contents: list = [prompt]
        if image is not None:
            contents.append({"mime_type": "image/jpeg", "data": image})

        fragments = []
        try:
            response = await self._model.generate_content_async(contents, stream=True)
            async for chunk in response:
                fragments.append(chunk.text)
        except google_exceptions.ResourceExhausted as e:
            raise ProviderRateLimitError(f"Gemini rate limit reached: {e}") from e
        except ValueError as e:
            # Raised by chunk.text when a candidate was blocked or empty
            raise ProviderError(f"Gemini returned no text: {e}") from e
        except Exception as e:
            raise ProviderError(f"Gemini request failed: {e}") from e

        return "".join(fragments)
