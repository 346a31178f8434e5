import io
import json
from datetime import date
from typing import Callable, List, Optional, Union

import pytest
from PIL import Image

from lexilens.errors import ProviderError
from lexilens.providers import ProviderName
from lexilens.providers.base import Provider

Reply = Union[str, Exception, Callable[[str], str]]


class FakeProvider(Provider):
    """Scripted provider that records every call."""

    def __init__(self, name: str = "FAKE", replies: Optional[List[Reply]] = None, default: Reply = ""):
        self._name = name
        self._replies = list(replies or [])
        self._default = default
        self.calls: list[tuple[str, Optional[bytes]]] = []
        self.closed = False

    @property
    def name(self) -> str:
        return self._name

    async def generate(self, prompt: str, image: Optional[bytes] = None) -> str:
        self.calls.append((prompt, image))
        reply = self._replies.pop(0) if self._replies else self._default
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply

    async def aclose(self) -> None:
        self.closed = True


def words_from_prompt(prompt: str) -> list[str]:
    """Recover the word list embedded on the second line of an enrichment prompt."""
    return prompt.splitlines()[1].split(", ")


def echo_records(prompt: str) -> str:
    """Reply with one well-formed record per word, wrapped in prose."""
    records = [{"word": w, "translation": f"zh-{w}", "phonetic": None} for w in words_from_prompt(prompt)]
    return "Here you go:\n```json\n" + json.dumps(records, ensure_ascii=False) + "\n```\nDone."


@pytest.fixture
def png_bytes() -> bytes:
    img = Image.new("RGB", (32, 16), color=(200, 30, 30))
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def fixed_today() -> date:
    return date(2025, 1, 15)


@pytest.fixture
def failing_provider() -> FakeProvider:
    return FakeProvider(name="MIXTRAL", default=ProviderError("upstream exploded"))


@pytest.fixture
def provider_names():
    return list(ProviderName)
