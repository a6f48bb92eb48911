"""Shared plumbing between the gateway operation groups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kv_gateway.bridge import AsyncLoopBridge
from kv_gateway.codec import ValueCodec
from kv_gateway.config import GatewaySettings
from kv_gateway.errors import CommandError, UnexpectedReplyError
from kv_gateway.results import Lookup


if TYPE_CHECKING:
    from kv_gateway.executors import CommandExecutor, Reply


logger = logging.getLogger(__name__)


class GatewayCore:
    """Executor, codec and settings shared by every operation group."""

    def __init__(
        self,
        executor: CommandExecutor,
        *,
        codec: ValueCodec | None = None,
        settings: GatewaySettings | None = None,
    ) -> None:
        super().__init__()
        self._executor = executor
        self._codec = codec if codec is not None else ValueCodec()
        self._settings = settings if settings is not None else GatewaySettings()
        self._bridge = AsyncLoopBridge()

    @property
    def settings(self) -> GatewaySettings:
        return self._settings

    def _send(self, tokens: list[str]) -> Reply:
        logger.debug("sending %s with %d arguments", tokens[0], len(tokens) - 1)
        return self._bridge.run(self._executor.execute(tokens))

    def _command(self, tokens: list[str]) -> Any:
        """Send ``tokens`` and return the reply value, raising on failure."""
        reply = self._send(tokens)
        if not reply.ok:
            raise CommandError(tokens, reply.error)
        return reply.value

    def _write(self, tokens: list[str]) -> None:
        reply = self._send(tokens)
        if reply.ok:
            return
        if self._settings.check_writes:
            raise CommandError(tokens, reply.error)
        logger.warning("ignoring failed %s: %s", tokens[0], reply.error)

    def _lookup(self, tokens: list[str]) -> Lookup:
        reply = self._send(tokens)
        if not reply.ok:
            return Lookup.failed(tuple(tokens), reply.error)
        if reply.value is None:
            return Lookup.missing()
        if not isinstance(reply.value, str):
            raise UnexpectedReplyError(tokens[0], reply.value)
        return Lookup.found(self._codec.decode(reply.value))
