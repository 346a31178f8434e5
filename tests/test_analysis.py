"""Tests for single-provider analysis and the comparison fan-out."""

import asyncio

import pytest

from conftest import FakeProvider
from lexilens.analysis import analyze_image, compare_image
from lexilens.errors import ExtractionError, ProviderError
from lexilens.providers import ProviderName


class SlowProvider(FakeProvider):
    """Provider that yields to the event loop before replying."""

    def __init__(self, name, reply, delay, log):
        super().__init__(name=name, default=reply)
        self._delay = delay
        self._log = log

    async def generate(self, prompt, image=None):
        self._log.append(f"start {self.name}")
        await asyncio.sleep(self._delay)
        self._log.append(f"end {self.name}")
        return await super().generate(prompt, image)


def test_analyze_returns_parsed_result(fixed_today):
    provider = FakeProvider(default='{"expiration_date": "2026.01.01"}')
    result = asyncio.run(analyze_image(provider, b"jpeg", fixed_today))
    assert result.expiration_date == "2026.01.01"
    assert provider.calls[0][1] == b"jpeg"


def test_analyze_without_json_raises(fixed_today):
    provider = FakeProvider(name="GEMINI", default="nothing useful")
    with pytest.raises(ExtractionError, match="GEMINI"):
        asyncio.run(analyze_image(provider, b"jpeg", fixed_today))


def test_analyze_propagates_provider_error(fixed_today):
    provider = FakeProvider(default=ProviderError("down"))
    with pytest.raises(ProviderError):
        asyncio.run(analyze_image(provider, b"jpeg", fixed_today))


def test_compare_runs_providers_concurrently_in_fixed_order(fixed_today):
    log = []
    providers = {
        ProviderName.MIXTRAL: SlowProvider("MIXTRAL", '{"production_id": "m"}', 0.01, log),
        ProviderName.GEMINI: SlowProvider("GEMINI", '{"production_id": "g"}', 0.05, log),
    }

    results = asyncio.run(compare_image(providers, b"jpeg", fixed_today))

    assert [r.production_id for r in results] == ["g", "m"]
    assert log[:2] == ["start GEMINI", "start MIXTRAL"]


def test_compare_isolates_failures(fixed_today):
    providers = {
        ProviderName.GEMINI: FakeProvider(default=RuntimeError("unexpected")),
        ProviderName.MIXTRAL: FakeProvider(default='{"production_id": "ok"}'),
    }

    results = asyncio.run(compare_image(providers, b"jpeg", fixed_today))

    assert results[0].model_dump() == {
        "production_date": None,
        "expiration_date": None,
        "production_id": None,
        "additional_info": None,
    }
    assert results[1].production_id == "ok"
