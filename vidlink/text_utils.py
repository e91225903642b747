from __future__ import annotations

import re

HTTP_URL_RE = re.compile(r"^https?://", re.IGNORECASE)

MAX_DEBUG_SNIPPET_CHARS = 2000

_ESCAPES = (
    ("\\u0025", "%"),
    ("\\u0026", "&"),
    ("\\/", "/"),
    ('\\"', '"'),
)


def is_http_url(value: str | None) -> bool:
    return isinstance(value, str) and bool(HTTP_URL_RE.match(value))


def unescape_value(value: str) -> str:
    """Decode the JS escapes that commonly wrap URLs inlined in page markup."""
    for escaped, plain in _ESCAPES:
        value = value.replace(escaped, plain)
    return value


def unescape_json_value(value: str) -> str:
    """Like unescape_value, then drop every leftover backslash.

    Inlined JSON-in-JSON payloads double escape, so a single pass leaves
    fragments such as ``\\u0025`` or ``https:\\/\\/`` behind.
    """
    value = unescape_value(value)
    value = value.replace("\\u0025", "%")
    return value.replace("\\", "")


def debug_snippet(text: str, limit: int = MAX_DEBUG_SNIPPET_CHARS) -> str:
    limit = max(0, min(int(limit), MAX_DEBUG_SNIPPET_CHARS))
    return text[:limit]
