"""Input validation and sanitization helpers.

These are pure functions applied to every request before it reaches the
store. Sanitization is a second layer on top of bound query parameters:
characters are deleted rather than escaped, so stored text may differ from
what was submitted.
"""

import re
from typing import Any

# Canonical RFC 4122 form: version nibble 1-5, variant nibble 8/9/a/b
_CLIENT_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# NUL, backspace, tab, LF, CR, SUB, quotes, backslash, percent, angle brackets
_UNSAFE_CHARS = re.compile(r"[\x00\x08\x09\x1a\n\r\"'\\%<>]")


def is_valid_client_id(value: Any) -> bool:
    """Check that a value is a hyphenated, versioned UUID string.

    Args:
        value: Candidate client identifier, usually a path parameter.

    Returns:
        True only for strings in canonical 8-4-4-4-12 form. None, non-strings
        and anything with surrounding whitespace are rejected. Ids are never
        trimmed before matching, so " <uuid>" is invalid even though it
        contains a well-formed id.
    """
    if not isinstance(value, str):
        return False
    return _CLIENT_ID_PATTERN.fullmatch(value) is not None


def sanitize_text(value: Any) -> str | None:
    """Strip control and markup characters from free text.

    Args:
        value: Raw field value. None is returned unchanged; anything else is
            coerced to str first.

    Returns:
        The cleaned text with leading/trailing whitespace removed, or None.
    """
    if value is None:
        return None
    return _UNSAFE_CHARS.sub("", str(value)).strip()
