"""Extract JSON values embedded in free-text model replies."""

import json
import re
from typing import Any, Optional

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
_OPENERS = {list: "[", dict: "{"}

_decoder = json.JSONDecoder()


def extract_json(text: Optional[str], expected: type = dict) -> Optional[Any]:
    """
    Find the first JSON value of the expected shape in a model reply.

    Fenced ```json blocks are tried first; after that the raw text is scanned
    for the first opening bracket that starts a complete, parsable value.

    Args:
        text: Raw reply from the provider
        expected: ``dict`` for a JSON object, ``list`` for a JSON array

    Returns:
        The parsed value, or None when nothing of the expected shape is found
    """
    if expected not in _OPENERS:
        raise ValueError(f"Unsupported JSON shape: {expected!r}")
    if not text:
        return None

    for match in _FENCED_BLOCK.finditer(text):
        value = _scan(match.group(1), expected)
        if value is not None:
            return value

    return _scan(text, expected)


def extract_json_array(text: Optional[str]) -> Optional[list]:
    """Find the first JSON array in a reply."""
    return extract_json(text, list)


def extract_json_object(text: Optional[str]) -> Optional[dict]:
    """Find the first JSON object in a reply."""
    return extract_json(text, dict)


def _scan(text: str, expected: type) -> Optional[Any]:
    opener = _OPENERS[expected]
    position = text.find(opener)
    while position != -1:
        try:
            value, _ = _decoder.raw_decode(text, position)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, expected):
            return value
        position = text.find(opener, position + 1)
    return None
