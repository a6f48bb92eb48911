"""Hash field operations."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from itertools import batched
from typing import TYPE_CHECKING, Any

from kv_gateway.codec import render_key

from .base import GatewayCore


if TYPE_CHECKING:
    from collections.abc import Mapping

    from kv_gateway.results import Lookup


logger = logging.getLogger(__name__)


def _field_list(fields: Any) -> list[str]:
    if isinstance(fields, (str, bytes)) or not isinstance(fields, Iterable):
        return [render_key(fields)]
    return [render_key(field) for field in fields]


class HashGateway(GatewayCore):
    """Field-level access to named hashes."""

    def hset(self, hash_name: Any, field: Any, value: Any) -> None:
        self._write(["HSET", render_key(hash_name), render_key(field), self._codec.encode(value)])

    def hmset(self, hash_name: Any, mapping: Mapping[Any, Any]) -> None:
        """Write every field of ``mapping``, at most ``hmset_chunk_size`` pairs per command.

        Chunks follow the mapping's insertion order and are sent as independent
        commands; a failure part way leaves the earlier chunks written.
        """
        name = render_key(hash_name)
        chunks = batched(mapping.items(), self._settings.hmset_chunk_size)
        for number, chunk in enumerate(chunks, start=1):
            tokens = ["HMSET", name]
            for field, value in chunk:
                tokens.extend((render_key(field), self._codec.encode(value)))
            logger.debug("HMSET %s chunk %d: %d fields", name, number, len(chunk))
            self._write(tokens)

    def hdel(self, hash_name: Any, fields: Any) -> None:
        """Delete one field, or every field of an iterable, in a single command."""
        names = _field_list(fields)
        if not names:
            return
        self._write(["HDEL", render_key(hash_name), *names])

    def hkeys(self, hash_name: Any) -> list[str]:
        """Return the hash's field names in store order."""
        keys = self._command(["HKEYS", render_key(hash_name)])
        return list(keys) if keys is not None else []

    def hlookup(self, hash_name: Any, field: Any) -> Lookup:
        return self._lookup(["HGET", render_key(hash_name), render_key(field)])

    def hget(self, hash_name: Any, field: Any) -> Any:
        """Return the decoded field value, or ``None`` when it does not exist."""
        return self.hlookup(hash_name, field).unwrap()
