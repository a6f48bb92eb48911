"""Parsing of ``HSCAN`` reply pages."""

from __future__ import annotations

from typing import Any

from kv_gateway.errors import UnexpectedReplyError


def parse_scan_reply(reply: Any) -> tuple[str, list[str]]:
    """Split an ``HSCAN`` reply into its next cursor and flat field/value list."""
    if not isinstance(reply, (list, tuple)) or len(reply) != 2:
        raise UnexpectedReplyError("HSCAN", reply)
    cursor, flat = reply
    if not isinstance(cursor, str) or not isinstance(flat, (list, tuple)):
        raise UnexpectedReplyError("HSCAN", reply)
    return cursor, list(flat)


def pair_fields(flat: list[str]) -> list[tuple[str, str]]:
    """Regroup ``[f1, v1, f2, v2, ...]`` into ``[(f1, v1), (f2, v2), ...]``."""
    if len(flat) % 2:
        raise UnexpectedReplyError("HSCAN", flat)
    return list(zip(flat[::2], flat[1::2], strict=True))
