"""Exception hierarchy for kv-gateway.

Every error raised by the gateway inherits from ``KVGatewayError`` so callers
can catch the whole family at once, or target a single failure kind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Sequence


class KVGatewayError(Exception):
    """Base exception for all kv-gateway errors."""


class CommandError(KVGatewayError):
    """The command executor reported a failed command."""

    def __init__(self, command: Sequence[str], reason: str | None) -> None:
        self.command = tuple(command)
        self.reason = reason or "unknown executor failure"
        name = self.command[0] if self.command else "<empty>"
        super().__init__(f"{name} failed: {self.reason}")


class EncodeError(KVGatewayError):
    """A value could not be encoded into its structured wire form."""


class DecodeError(KVGatewayError):
    """Stored data claiming to be structured could not be decoded."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        preview = raw if len(raw) <= 40 else f"{raw[:40]}..."
        super().__init__(f"malformed structured value: {preview!r}")


class UnexpectedReplyError(KVGatewayError):
    """A reply did not have the shape the command protocol promises."""

    def __init__(self, command: str, reply: Any) -> None:
        self.command = command
        self.reply = reply
        super().__init__(f"unexpected {command} reply: {reply!r}")


class ScanNotConvergedError(KVGatewayError):
    """A hash scan did not reach the terminal cursor within its page budget."""

    def __init__(self, hash_name: str, pages: int) -> None:
        self.hash_name = hash_name
        self.pages = pages
        super().__init__(f"scan of {hash_name!r} did not converge after {pages} pages")
