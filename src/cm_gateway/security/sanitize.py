"""Best-effort removal of markup/script fragments from request strings.

This is a denylist, not an HTML parser. Every payload is passed through
sanitize() before schema validation, so validated values are already
clean. Categories removed:
  - <script>, <iframe>, <object>, <applet> elements (with content)
  - <embed> tags
  - javascript: URIs
  - inline event-handler attributes (onclick=, onload=, ...)
  - <img ... onerror= fragments

The pattern list is re-applied until nothing matches, so fragments that
only form a tag after an inner removal (<scr<script></script>ipt>) are
removed too, and sanitize(sanitize(x)) == sanitize(x).
"""

import re
from typing import Annotated, Any

from pydantic import AfterValidator

_XSS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"<script[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<iframe[^>]*>.*?</iframe\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<object[^>]*>.*?</object\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<embed[^>]*>", re.IGNORECASE),
    re.compile(r"<applet[^>]*>.*?</applet\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
    re.compile(r"<\s*img[^>]*onerror\s*=", re.IGNORECASE),
)

def sanitize_string(value: str) -> str:
    previous = None
    while previous != value:
        previous = value
        for pattern in _XSS_PATTERNS:
            value = pattern.sub("", value)
    return value.strip()


def sanitize(value: Any) -> Any:
    """Recursively sanitize every string leaf of a JSON-like structure."""
    if isinstance(value, str):
        return sanitize_string(value)
    if isinstance(value, list):
        return [sanitize(item) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize(item) for item in value)
    if isinstance(value, dict):
        return {key: sanitize(item) for key, item in value.items()}
    return value


# Schema-level guard for free-text fields; applied again after sanitize()
# so models built outside read_payload() are covered as well.
SanitizedStr = Annotated[str, AfterValidator(sanitize_string)]
