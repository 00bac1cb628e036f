"""Robust JSON extraction from LLM output."""

import json
import re
from typing import Any, Dict
from modelseed.config.logging import get_logger

logger = get_logger(__name__)


class JSONParseError(Exception):
    """Raised when JSON parsing fails."""

    pass


def _fix_common_json_issues(json_str: str) -> str:
    """
    Attempt to fix common JSON formatting issues.

    Fixes:
    - Trailing commas
    - Single-quoted keys
    """
    original = json_str

    # Remove trailing commas before closing braces/brackets
    json_str = re.sub(r",(\s*[}\]])", r"\1", json_str)

    # 'key': value -> "key": value
    json_str = re.sub(r"'(\w+)'\s*:", r'"\1":', json_str)

    if json_str != original:
        logger.debug("Fixed common JSON issues (trailing commas, quotes)")

    return json_str


def _loads_with_fix(json_str: str, label: str, errors: list) -> Any:
    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        errors.append(f"{label} parse error: {e}")
    try:
        return json.loads(_fix_common_json_issues(json_str))
    except json.JSONDecodeError as e:
        errors.append(f"{label} parse error (after fix): {e}")
    return None


def _balanced_object(text: str) -> str:
    """Return the first balanced {...} span of text, or an empty string."""
    start_idx = text.find("{")
    if start_idx == -1:
        return ""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start_idx, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start_idx:i + 1]
    return ""


def extract_json(text: str) -> Dict[str, Any]:
    """
    Extract a JSON object from LLM output text.

    Handles markdown code blocks and explanatory text around the object.

    Args:
        text: Raw LLM output text

    Returns:
        Parsed JSON as dictionary

    Raises:
        JSONParseError: If no valid JSON object can be extracted
    """
    errors: list = []

    match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, re.DOTALL)
    if match:
        data = _loads_with_fix(match.group(1), "Code block", errors)
        if isinstance(data, dict):
            return data

    candidate = _balanced_object(text)
    if candidate:
        data = _loads_with_fix(candidate, "JSON object", errors)
        if isinstance(data, dict):
            return data

    try:
        data = json.loads(text.strip())
        if isinstance(data, dict):
            return data
        errors.append(f"Full text is JSON but not an object ({type(data).__name__})")
    except json.JSONDecodeError as e:
        errors.append(f"Full text parse error: {e}")

    error_summary = "; ".join(errors[-3:])
    error_msg = f"Could not extract valid JSON from LLM output. Errors: {error_summary}."
    logger.error(error_msg)
    logger.debug(f"Text content (first 1000 chars): {text[:1000]}...")
    raise JSONParseError(error_msg)
