"""URL-safe text encoding for share token payloads.

A payload is serialized to compact JSON, percent-encoded the way browsers
encode URI components, then base64-encoded with `+` and `/` replaced by `-`
and `_` and the `=` padding removed, so the token fits in a URL path segment.
"""

import base64
import json
from typing import Any
from urllib.parse import quote, unquote

# Characters left untouched by a URI-component encoder
_URI_COMPONENT_SAFE = "-_.!~*'()"

_TO_URL_SAFE = str.maketrans({"+": "-", "/": "_"})
_FROM_URL_SAFE = str.maketrans({"-": "+", "_": "/"})


class ShareTokenDecodeError(ValueError):
    """Raised when a token is not a well-formed encoded payload."""


def encode_payload(payload: dict[str, Any]) -> str:
    serialized = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    escaped = quote(serialized, safe=_URI_COMPONENT_SAFE)
    encoded = base64.b64encode(escaped.encode("ascii")).decode("ascii")
    return encoded.translate(_TO_URL_SAFE).rstrip("=")


def restore_padding(value: str) -> str:
    return value + "=" * (-len(value) % 4)


def decode_payload(token: str) -> dict[str, Any]:
    normalized = restore_padding(token.translate(_FROM_URL_SAFE))
    try:
        escaped = base64.b64decode(normalized, validate=True).decode("ascii")
        payload = json.loads(unquote(escaped, errors="strict"))
    except (ValueError, RecursionError) as e:
        raise ShareTokenDecodeError(str(e)) from e
    if not isinstance(payload, dict):
        raise ShareTokenDecodeError("Token payload is not an object")
    return payload
