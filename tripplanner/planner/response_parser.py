"""
Response parser for the planner.

Extracts a JSON value from LLM completion text. The model is asked for a
bare JSON object but may wrap it in markdown fences or surround it with
commentary, so extraction falls back through progressively looser
strategies.
"""

import json
import logging
import re
from typing import Any, Optional


logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when a completion cannot be turned into a plan."""

    pass


class JSONExtractionError(ParseError):
    """Raised when no parseable JSON is found in the completion text."""

    pass


_LEADING_JSON_FENCE = re.compile(r"^```json\s*", re.IGNORECASE)
_LEADING_FENCE = re.compile(r"^```\s*")
_TRAILING_FENCE = re.compile(r"\s*```$")

# A brace-delimited block whose body may contain brace blocks one level deep
_BALANCED_OBJECT = re.compile(r"\{(?:[^{}]|\{[^{}]*\})*\}")

_NOT_FOUND = object()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _try_parse(text: str) -> Any:
    # NaN/Infinity are not JSON; nesting past the recursion limit is unparseable
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return _NOT_FOUND


def strip_code_fences(text: str) -> str:
    """
    Remove a leading ```json / ``` fence and a trailing ``` fence.

    Args:
        text: Raw completion text

    Returns:
        Text with fences and surrounding whitespace removed
    """
    cleaned = text.strip()
    cleaned = _LEADING_JSON_FENCE.sub("", cleaned)
    cleaned = _LEADING_FENCE.sub("", cleaned)
    cleaned = _TRAILING_FENCE.sub("", cleaned)
    return cleaned.strip()


def find_longest_object(text: str) -> Any:
    """
    Parse every balanced brace block in text and return the longest that parses.

    Ties go to the later block. Returns an internal sentinel when no block
    parses; callers should use extract_json instead.
    """
    best_value: Any = _NOT_FOUND
    best_length = -1

    for match in _BALANCED_OBJECT.finditer(text):
        candidate = match.group(0)
        value = _try_parse(candidate)
        if value is _NOT_FOUND:
            continue
        if len(candidate) >= best_length:
            best_value = value
            best_length = len(candidate)

    return best_value


def extract_json(raw_response: Optional[str]) -> Any:
    """
    Extract a JSON value from LLM response text.

    Strategies, in order, stopping at the first success:
    1. Parse the text as-is
    2. Strip markdown code fences and parse
    3. Parse each balanced brace block; the longest valid one wins

    Args:
        raw_response: Raw LLM response string

    Returns:
        The parsed JSON value (any JSON type)

    Raises:
        JSONExtractionError: If no strategy yields valid JSON
    """
    if not isinstance(raw_response, str) or not raw_response.strip():
        raise JSONExtractionError("Completion text is empty")

    value = _try_parse(raw_response)
    if value is not _NOT_FOUND:
        return value

    cleaned = strip_code_fences(raw_response)
    value = _try_parse(cleaned)
    if value is not _NOT_FOUND:
        logger.debug("Parsed JSON after stripping code fences")
        return value

    value = find_longest_object(cleaned)
    if value is not _NOT_FOUND:
        logger.debug("Parsed JSON from embedded brace block")
        return value

    raise JSONExtractionError(
        f"No valid JSON found in completion (length={len(raw_response)})"
    )
