"""Pydantic data models for the enrichment job and the analysis relay."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WordChunk(BaseModel):
    """A contiguous slice of the word list, identified by its starting offset."""

    offset: int
    words: list[str]


class ExamplePair(BaseModel):
    """An example sentence with its translation."""

    sentence: Optional[str] = None
    translation: Optional[str] = None


class EnrichmentRecord(BaseModel):
    """One enriched dictionary entry as returned by the provider."""

    model_config = ConfigDict(extra="allow")

    word: Optional[str] = None
    suggested: Optional[str] = None  # Corrected form for ALL-CAPS or misspelled input
    phonetic: Optional[str] = None
    translation: Optional[str] = None
    description: Optional[str] = None
    synonyms: Optional[list[str]] = None
    antonyms: Optional[list[str]] = None
    examples: Optional[list[ExamplePair]] = None


class AnalysisResult(BaseModel):
    """Dates and identifiers read from a product label."""

    production_date: Optional[str] = None
    expiration_date: Optional[str] = None
    production_id: Optional[str] = None
    additional_info: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (dict, list)):
            return None
        return str(value)

    @classmethod
    def empty(cls) -> "AnalysisResult":
        """Result with every field null, used when a provider fails."""
        return cls()


class AskRequest(BaseModel):
    """Body of a free-text ask request."""

    prompt: Optional[str] = None
    model: Optional[str] = None


class UsageCounters(BaseModel):
    """Process-lifetime request counters, one per endpoint plus a total."""

    analyze: int = 0
    compare_analyze: int = 0
    ask: int = 0
    status: int = 0
    check: int = 0
    total: int = 0

    def record(self, endpoint: str) -> None:
        """Count one request for an endpoint."""
        setattr(self, endpoint, getattr(self, endpoint) + 1)
        self.total += 1


class StatusReport(BaseModel):
    """Payload of the status endpoint."""

    status: str = "running"
    models: list[str] = Field(default_factory=list)
    version: str
    requests: UsageCounters
