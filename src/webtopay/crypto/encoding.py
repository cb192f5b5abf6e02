from __future__ import annotations

import base64

# Standard base64 with "+" and "/" swapped for URL-safe characters.
# Padding is preserved.
_ENCODE_TABLE = str.maketrans({"+": "-", "/": "_"})
_DECODE_TABLE = str.maketrans({"-": "+", "_": "/"})


def encode_safe_url_base64(text: str) -> str:
    """Encode text as URL-safe base64 of its UTF-8 bytes."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii").translate(_ENCODE_TABLE)


def decode_safe_url_base64_bytes(token: str) -> bytes:
    """Decode a URL-safe (or plain) base64 token to raw bytes."""
    return base64.b64decode(token.translate(_DECODE_TABLE))


def decode_safe_url_base64(token: str) -> str:
    """Inverse of :func:`encode_safe_url_base64`."""
    return decode_safe_url_base64_bytes(token).decode("utf-8")
