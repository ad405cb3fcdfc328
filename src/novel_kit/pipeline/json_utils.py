# src/novel_kit/pipeline/json_utils.py

"""Lenient extraction of JSON from model output."""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_JSON_BODY_RE = re.compile(r"(\[[\s\S]*\]|\{[\s\S]*\})")


def clean_json(text: str) -> str:
    """Strip markdown fences and surrounding prose from a JSON answer."""
    clean = _FENCE_RE.sub("", text).strip()
    match = _JSON_BODY_RE.search(clean)
    if match:
        clean = match.group(0)
    return clean


def parse_json(text: str) -> Any:
    cleaned = clean_json(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("JSON parse error. Raw text: %r, cleaned text: %r", text, cleaned)
        raise ValueError("Failed to parse JSON response from model") from e


def extract_list(data: Any) -> list[Any]:
    """Return the top-level array of a JSON answer.

    JSON mode forces some providers to wrap arrays in an object, so the first
    list-valued field of an object is accepted too.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for value in data.values():
            if isinstance(value, list):
                return value
    raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
