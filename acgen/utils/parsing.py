"""Shared parsing utilities for generator responses."""

import json
import re

_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


def extract_json_array(text: str) -> list:
    """Decode the bracket-delimited array embedded in free-form LLM output.

    The span runs from the first '[' to the last ']' of the raw text, so prose
    and code fences around the payload are ignored. Raises ValueError when
    there is no such span and json.JSONDecodeError when it does not decode.
    """
    match = _ARRAY_RE.search(text)
    if not match:
        raise ValueError("No JSON array found in response.")
    return json.loads(match.group(0))
