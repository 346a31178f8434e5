"""Explicit per-process state handed to the relay's request handlers."""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict

from lexilens.models import UsageCounters
from lexilens.providers import ProviderName
from lexilens.providers.base import Provider
from lexilens.rate_limit import FixedWindowRateLimiter


@dataclass
class RelayContext:
    """Providers, usage counters and rate limiter for one relay process."""

    providers: Dict[ProviderName, Provider]
    counters: UsageCounters = field(default_factory=UsageCounters)
    limiter: FixedWindowRateLimiter = field(default_factory=FixedWindowRateLimiter)
    today: Callable[[], date] = date.today

    @property
    def model_names(self) -> list[str]:
        """Configured provider selectors in comparison order."""
        return [name.value for name in ProviderName if name in self.providers]

    async def aclose(self) -> None:
        for provider in self.providers.values():
            await provider.aclose()
