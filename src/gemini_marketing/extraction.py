"""Structural JSON extraction from free-form model text.

Models asked for JSON still wrap it in markdown fences, prepend a sentence of
prose, or trail off with commentary. `extract_json` recovers the first JSON
object or array from such text.

The bracket matcher counts only the chosen delimiter pair and does not skip
delimiters inside string literals: ``'{"a": "} "}'`` ends at the first ``}``
and fails to parse. Only the first JSON document in the text is returned.
"""

from __future__ import annotations

import json
import re
from typing import Any

from gemini_marketing.exceptions import (
    InvalidJsonSyntaxError,
    NoJsonFoundError,
    UnterminatedJsonError,
)

_JSON_FENCE = re.compile(r"```json\s*([\s\S]*?)\s*```")
_CLOSERS = {"{": "}", "[": "]"}


def unwrap_fence(text: str) -> str:
    """Return the inner content of the first ```json fence, else ``text``."""
    match = _JSON_FENCE.search(text)
    if match and match.group(1):
        return match.group(1)
    return text


def find_json_span(text: str) -> tuple[int, int]:
    """Locate the first JSON object/array as an inclusive ``(start, end)`` span.

    Raises:
        NoJsonFoundError: Neither ``{`` nor ``[`` occurs in ``text``.
        UnterminatedJsonError: The depth counter never returns to zero.
    """
    first_brace = text.find("{")
    first_square = text.find("[")
    if first_brace == -1:
        start = first_square
    elif first_square == -1:
        start = first_brace
    else:
        start = min(first_brace, first_square)

    if start == -1:
        raise NoJsonFoundError("No JSON object or array found in the response.")

    opener = text[start]
    closer = _CLOSERS[opener]
    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
        if depth == 0:
            return start, index

    raise UnterminatedJsonError(
        "Could not find the closing bracket matching the JSON object/array."
    )


def extract_json(text: str) -> Any:
    """Parse the first JSON object or array embedded in ``text``.

    Steps: trim, unwrap the first ```json fence, pick whichever of ``{``/``[``
    comes first, match its closer by depth counting, then ``json.loads`` the
    inclusive slice.

    Args:
        text: Raw model output.

    Returns:
        The parsed JSON value (a dict or a list).

    Raises:
        NoJsonFoundError: No opening delimiter present.
        UnterminatedJsonError: Opening delimiter never balanced.
        InvalidJsonSyntaxError: The delimited fragment is not valid JSON.
    """
    working = unwrap_fence(text.strip())
    start, end = find_json_span(working)
    fragment = working[start : end + 1]
    try:
        return json.loads(fragment)
    except json.JSONDecodeError as e:
        raise InvalidJsonSyntaxError(
            f"The extracted fragment is not valid JSON: {e.msg} "
            f"(line {e.lineno}, column {e.colno}).",
            fragment=fragment,
        ) from e
