"""Exception hierarchy shared by the enrichment job and the relay."""


class LexiLensError(Exception):
    """Base class for all LexiLens errors."""

    pass


class ConfigError(LexiLensError):
    """Raised when a required setting or credential is missing."""

    pass


class ProviderError(LexiLensError):
    """Raised when a provider call fails."""

    pass


class ProviderRateLimitError(ProviderError):
    """Raised when a provider reports that its rate limit was hit."""

    pass


class ExtractionError(LexiLensError):
    """Raised when a reply does not contain the expected JSON value."""

    pass


class InvalidImageError(LexiLensError):
    """Raised when an uploaded file cannot be decoded as an image."""

    pass
