"""Iteration over ``HSCAN`` cursors."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kv_gateway.config import DEFAULT_SCAN_MAX_PAGES
from kv_gateway.errors import ScanNotConvergedError

from .pages import pair_fields, parse_scan_reply


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


logger = logging.getLogger(__name__)

INITIAL_CURSOR = "0"
TERMINAL_CURSOR = "0"


def scan_pages(
    send: Callable[[list[str]], Any],
    hash_name: str,
    pattern: str = "*",
    *,
    count: int | None = None,
    max_pages: int = DEFAULT_SCAN_MAX_PAGES,
) -> Iterator[list[tuple[str, str]]]:
    """Yield the field/value pairs of each ``HSCAN`` page until the cursor returns to ``"0"``.

    ``send`` issues one command and returns the reply value. The page carrying
    the terminal cursor is yielded too. More than ``max_pages`` round trips
    raise ``ScanNotConvergedError``.
    """
    cursor = INITIAL_CURSOR
    pages = 0
    while True:
        if pages >= max_pages:
            raise ScanNotConvergedError(hash_name, pages)

        tokens = ["HSCAN", hash_name, cursor, "MATCH", pattern]
        if count is not None:
            tokens.extend(("COUNT", str(count)))
        cursor, flat = parse_scan_reply(send(tokens))
        pages += 1

        page = pair_fields(flat)
        logger.debug("HSCAN %s page %d: %d fields, next cursor %s", hash_name, pages, len(page), cursor)
        yield page

        if cursor == TERMINAL_CURSOR:
            return
