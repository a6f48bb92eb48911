"""Redis-compatible executor implementation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from inspect import isawaitable
from typing import TYPE_CHECKING, Any, override

import redis.asyncio as redis_async
from redis.exceptions import RedisError

from .protocol import CommandExecutor, Reply


if TYPE_CHECKING:
    from collections.abc import Sequence


logger = logging.getLogger(__name__)


def _normalize_reply(value: Any) -> Any:
    """Map a parsed client reply back to protocol shape.

    Client response callbacks turn some replies into Python types (``SET`` to
    ``True``, ``HSCAN`` to ``(cursor, dict)``); the gateway expects strings and
    flat lists.
    """
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode()
    if isinstance(value, bool):
        return "OK" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Mapping):
        flat: list[Any] = []
        for field, item in value.items():
            flat.extend((_normalize_reply(field), _normalize_reply(item)))
        return flat
    if isinstance(value, (list, tuple)):
        return [_normalize_reply(item) for item in value]
    return value


class RedisExecutor(CommandExecutor):
    """Executor over ``redis.asyncio`` using raw ``execute_command`` calls."""

    def __init__(self, url: str = "redis://localhost:6379/0", *, client: Any | None = None) -> None:
        """Create an executor from URL or an injected async client.

        Parameters
        ----------
        url
            Redis connection URL used when ``client`` is not provided.
        client
            Optional injected client with ``execute_command/aclose`` API.
        """
        super().__init__()
        self._url = url
        if client is not None:
            self._client = client
            return

        self._client = redis_async.from_url(url, decode_responses=True)

    @override
    async def execute(self, tokens: Sequence[str]) -> Reply:
        """Run one command; client and connection errors become failure replies."""
        try:
            raw = await self._client.execute_command(*tokens)
        except (RedisError, OSError) as exc:
            logger.debug("%s failed on %s: %s", tokens[0], self._url, exc)
            return Reply.failure(str(exc) or type(exc).__name__)
        return Reply.success(_normalize_reply(raw))

    @override
    async def close(self) -> None:
        """Release executor resources."""
        close_method = getattr(self._client, "aclose", None)
        if close_method is None:
            close_method = getattr(self._client, "close", None)
        if close_method is None:
            return

        maybe_awaitable = close_method()
        if isawaitable(maybe_awaitable):
            await maybe_awaitable
