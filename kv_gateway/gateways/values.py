"""Top-level key operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kv_gateway.codec import render_key

from .base import GatewayCore


if TYPE_CHECKING:
    from kv_gateway.results import Lookup


class ValueGateway(GatewayCore):
    """``GET``/``SET``/``DEL`` with transparent value encoding."""

    def delete(self, key: Any) -> None:
        """Delete a top-level key; deleting an absent key is not an error."""
        self._write(["DEL", render_key(key)])

    def set(self, key: Any, value: Any) -> None:
        """Store ``value`` under ``key``, encoding it when it is not a scalar."""
        self._write(["SET", render_key(key), self._codec.encode(value)])

    def lookup(self, key: Any) -> Lookup:
        """Read ``key`` without raising on executor failure."""
        return self._lookup(["GET", render_key(key)])

    def get(self, key: Any) -> Any:
        """Return the decoded value of ``key``, or ``None`` when it does not exist.

        Raises
        ------
        CommandError
            The executor reported a failure.
        DecodeError
            The stored value looks structured but cannot be decoded.
        """
        return self.lookup(key).unwrap()
