"""LexiLens: dictionary enrichment job and image analysis relay."""

__version__ = "1.0.0"
