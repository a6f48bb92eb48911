"""Value encoding policy for a string-only store.

Strings and numbers travel verbatim. Everything else is wrapped in an envelope
``{"__kv__": value}`` and handed to the JSON codec, so every structured payload
starts with ``{``. A string that itself starts with ``{`` is enveloped too,
which keeps the ``{`` prefix an unambiguous marker on read.
"""

from __future__ import annotations

import json
import numbers
from collections.abc import Callable
from typing import Any

from kv_gateway.errors import DecodeError, EncodeError


ENVELOPE_KEY = "__kv__"
STRUCTURED_PREFIX = "{"


def render_key(key: Any) -> str:
    """Render a key, hash name or field name in its display-string form."""
    if isinstance(key, bytes):
        return key.decode()
    return str(key)


def is_number(value: Any) -> bool:
    """Return True for numbers rendered as decimal strings (bool excluded)."""
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


class ValueCodec:
    """Encode values for the wire and decode them back."""

    def __init__(
        self,
        json_encoder: Callable[[Any], str] = json.dumps,
        json_decoder: Callable[[str], Any] = json.loads,
    ) -> None:
        super().__init__()
        self._json_encoder = json_encoder
        self._json_decoder = json_decoder

    def encode(self, value: Any) -> str:
        """Return the wire string for ``value``."""
        if isinstance(value, str) and not value.startswith(STRUCTURED_PREFIX):
            return value
        if is_number(value):
            return str(value)

        try:
            encoded = self._json_encoder({ENVELOPE_KEY: value})
        except (TypeError, ValueError) as exc:
            msg = f"cannot encode value of type {type(value).__name__}"
            raise EncodeError(msg) from exc
        if not isinstance(encoded, str) or not encoded.startswith(STRUCTURED_PREFIX):
            msg = "encoder output must be a string starting with '{'"
            raise EncodeError(msg)
        return encoded

    def decode(self, raw: str) -> Any:
        """Return the value stored as ``raw``.

        Values without the ``{`` prefix come back unchanged. Bare JSON objects
        written without an envelope are returned as decoded.
        """
        if not raw.startswith(STRUCTURED_PREFIX):
            return raw

        try:
            decoded = self._json_decoder(raw)
        except (TypeError, ValueError) as exc:
            raise DecodeError(raw) from exc

        if isinstance(decoded, dict) and len(decoded) == 1 and ENVELOPE_KEY in decoded:
            return decoded[ENVELOPE_KEY]
        return decoded
