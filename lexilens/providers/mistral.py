"""Mistral chat-completions provider over the REST API."""

import json
from typing import Any, Dict, Optional

import httpx
from tenacity import RetryError, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

import config
from lexilens.errors import ProviderError, ProviderRateLimitError
from lexilens.imaging import to_data_url
from lexilens.providers.base import Provider


def parse_stream_line(line: str) -> Optional[str]:
    """
    Parse one server-sent-events line of a streamed completion.

    Args:
        line: Raw line from the response body

    Returns:
        The content fragment carried by the line, or None for non-data lines
        and the terminating ``[DONE]`` marker
    """
    line = line.strip()
    if not line.startswith("data:"):
        return None
    data = line[len("data:"):].strip()
    if not data or data == "[DONE]":
        return None

    try:
        event = json.loads(data)
    except json.JSONDecodeError as e:
        raise ProviderError(f"Malformed stream event from Mistral: {data[:200]}") from e

    choices = event.get("choices") or []
    if not choices:
        return None
    content = (choices[0].get("delta") or {}).get("content")
    return content if isinstance(content, str) else None


class MistralProvider(Provider):
    """Mistral provider; uses the vision model when an image is attached."""

    def __init__(
        self,
        api_key: str,
        client: Optional[httpx.AsyncClient] = None,
        vision_model: str = config.MISTRAL_VISION_MODEL,
        text_model: str = config.MISTRAL_TEXT_MODEL,
        max_tokens: int = config.MISTRAL_MAX_TOKENS,
        temperature: float = config.MISTRAL_TEMPERATURE,
    ):
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.MISTRAL_TIMEOUT)
        self._vision_model = vision_model
        self._text_model = text_model
        self._max_tokens = max_tokens
        self._temperature = temperature

    @property
    def name(self) -> str:
        return "MIXTRAL"

    def build_payload(self, prompt: str, image: Optional[bytes] = None) -> Dict[str, Any]:
        """Build the chat-completions request body."""
        if image is None:
            model = self._text_model
            content: Any = prompt
        else:
            model = self._vision_model
            content = [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": to_data_url(image)},
            ]
        return {
            "model": model,
            "messages": [{"role": "user", "content": content}],
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "stream": True,
        }

    async def generate(self, prompt: str, image: Optional[bytes] = None) -> str:
        payload = self.build_payload(prompt, image)
        try:
            return await self._stream_completion(payload)
        except RetryError as e:
            raise ProviderError(
                f"Could not connect to Mistral after {config.MISTRAL_MAX_RETRIES} attempts"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Mistral request failed: {e}") from e

    @retry(
        stop=stop_after_attempt(config.MISTRAL_MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
    )
    async def _stream_completion(self, payload: Dict[str, Any]) -> str:
        headers = {
            "Content-Type": "application/json",
            "Accept": "text/event-stream",
            "Authorization": f"Bearer {self._api_key}",
        }

        fragments = []
        async with self._client.stream(
            "POST", config.MISTRAL_API_URL, json=payload, headers=headers
        ) as response:
            if response.status_code == 429:
                raise ProviderRateLimitError("Mistral rate limit reached")
            if response.status_code >= 400:
                body = (await response.aread()).decode("utf-8", errors="replace")
                raise ProviderError(f"Mistral API error {response.status_code}: {body[:500]}")

            async for line in response.aiter_lines():
                fragment = parse_stream_line(line)
                if fragment:
                    fragments.append(fragment)

        return "".join(fragments)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
