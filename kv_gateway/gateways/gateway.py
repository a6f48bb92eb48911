"""Synchronous key/value and hash gateway over a command executor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from kv_gateway.config import GatewaySettings
from kv_gateway.executors import RedisExecutor

from .hashes import HashGateway
from .scans import ScanGateway
from .values import ValueGateway


if TYPE_CHECKING:
    from kv_gateway.codec import ValueCodec


class KVGateway(ValueGateway, HashGateway, ScanGateway):
    """Store scalars and structured values under string keys and hash fields.

    Every call is one blocking round trip to the executor (scans: one per
    page), run on the gateway's own event-loop thread.
    """

    @classmethod
    def from_url(
        cls,
        url: str | None = None,
        *,
        settings: GatewaySettings | None = None,
        codec: ValueCodec | None = None,
    ) -> Self:
        """Build a gateway talking to a Redis-compatible server."""
        resolved = settings if settings is not None else GatewaySettings.from_env()
        executor = RedisExecutor(url if url is not None else resolved.url)
        return cls(executor, codec=codec, settings=resolved)

    def close(self) -> None:
        """Close the executor and stop the event-loop thread."""
        if not self._bridge.running:
            return
        try:
            self._bridge.run(self._executor.close())
        finally:
            self._bridge.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
