"""Cursor-based hash scans."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kv_gateway.codec import render_key
from kv_gateway.scanning import scan_pages

from .base import GatewayCore


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


logger = logging.getLogger(__name__)


class ScanGateway(GatewayCore):
    """Paginated ``HSCAN`` access in eager and streaming modes."""

    def iter_hscan(
        self,
        hash_name: Any,
        pattern: str = "*",
        *,
        count: int | None = None,
        raw: bool = False,
    ) -> Iterator[dict[str, Any]]:
        """Yield one ``{field: value}`` dict per scan page, in scan order.

        Values are decoded like ``hget`` results unless ``raw`` is set.
        ``count`` is a page size hint and defaults to ``settings.scan_count``.
        """
        pages = scan_pages(
            self._command,
            render_key(hash_name),
            pattern,
            count=count if count is not None else self._settings.scan_count,
            max_pages=self._settings.scan_max_pages,
        )
        for page in pages:
            if raw:
                yield dict(page)
            else:
                yield {field: self._codec.decode(value) for field, value in page}

    def hscan(
        self,
        hash_name: Any,
        pattern: str = "*",
        *,
        count: int | None = None,
        raw: bool = False,
    ) -> dict[str, Any]:
        """Return every field matching ``pattern``, merged across all pages.

        A field delivered on more than one page keeps its latest value.
        """
        merged: dict[str, Any] = {}
        pages = 0
        for page in self.iter_hscan(hash_name, pattern, count=count, raw=raw):
            merged.update(page)
            pages += 1
        logger.info("HSCAN %s %r finished: %d pages, %d fields", hash_name, pattern, pages, len(merged))
        return merged

    def hscan_to(
        self,
        callback: Callable[[dict[str, Any]], Any],
        hash_name: Any,
        pattern: str = "*",
        *,
        count: int | None = None,
        raw: bool = False,
    ) -> None:
        """Call ``callback`` once per page with that page's fields.

        An exception from ``callback`` aborts the scan and propagates.
        """
        for page in self.iter_hscan(hash_name, pattern, count=count, raw=raw):
            callback(page)
