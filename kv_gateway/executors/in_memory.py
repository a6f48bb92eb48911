"""In-memory executor implementation."""

from __future__ import annotations

import asyncio
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING, override

from .protocol import CommandExecutor, Reply


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


_WRONGTYPE = "WRONGTYPE Operation against a key holding the wrong kind of value"


def _arity_error(name: str) -> Reply:
    return Reply.failure(f"ERR wrong number of arguments for '{name.lower()}' command")


class InMemoryExecutor(CommandExecutor):
    """Command-level store emulation for local development and tests.

    Hashes keep field insertion order. ``HSCAN`` pages walk that order with
    integer offsets as cursors, ``page_size`` fields per page unless the
    command carries ``COUNT``.
    """

    def __init__(self, page_size: int = 10) -> None:
        super().__init__()
        if page_size < 1:
            msg = "page_size must be at least 1"
            raise ValueError(msg)
        self._page_size = page_size
        self._store: dict[str, str | dict[str, str]] = {}
        self._lock = asyncio.Lock()
        self._handlers: dict[str, Callable[[list[str]], Reply]] = {
            "DEL": self._del,
            "SET": self._set,
            "GET": self._get,
            "HSET": self._hset,
            "HMSET": self._hmset,
            "HDEL": self._hdel,
            "HKEYS": self._hkeys,
            "HGET": self._hget,
            "HSCAN": self._hscan,
        }

    @override
    async def execute(self, tokens: Sequence[str]) -> Reply:
        """Run one command against the in-memory store."""
        if not tokens:
            return Reply.failure("ERR empty command")
        name = tokens[0].upper()
        handler = self._handlers.get(name)
        if handler is None:
            return Reply.failure(f"ERR unknown command '{tokens[0]}'")
        async with self._lock:
            return handler(list(tokens[1:]))

    @override
    async def close(self) -> None:
        """Release executor resources."""
        return

    def _hash_for_read(self, key: str) -> dict[str, str] | None:
        value = self._store.get(key)
        if value is None:
            return {}
        if isinstance(value, dict):
            return value
        return None

    def _hash_for_write(self, key: str) -> dict[str, str] | None:
        value = self._store.setdefault(key, {})
        if isinstance(value, dict):
            return value
        return None

    def _del(self, args: list[str]) -> Reply:
        if not args:
            return _arity_error("DEL")
        removed = sum(1 for key in args if self._store.pop(key, None) is not None)
        return Reply.success(str(removed))

    def _set(self, args: list[str]) -> Reply:
        if len(args) != 2:
            return _arity_error("SET")
        key, value = args
        self._store[key] = value
        return Reply.success("OK")

    def _get(self, args: list[str]) -> Reply:
        if len(args) != 1:
            return _arity_error("GET")
        value = self._store.get(args[0])
        if isinstance(value, dict):
            return Reply.failure(_WRONGTYPE)
        return Reply.success(value)

    def _write_fields(self, name: str, args: list[str]) -> Reply | int:
        if len(args) < 3 or len(args) % 2 == 0:
            return _arity_error(name)
        fields = self._hash_for_write(args[0])
        if fields is None:
            return Reply.failure(_WRONGTYPE)
        added = 0
        for index in range(1, len(args), 2):
            if args[index] not in fields:
                added += 1
            fields[args[index]] = args[index + 1]
        return added

    def _hset(self, args: list[str]) -> Reply:
        result = self._write_fields("HSET", args)
        if isinstance(result, Reply):
            return result
        return Reply.success(str(result))

    def _hmset(self, args: list[str]) -> Reply:
        result = self._write_fields("HMSET", args)
        if isinstance(result, Reply):
            return result
        return Reply.success("OK")

    def _hdel(self, args: list[str]) -> Reply:
        if len(args) < 2:
            return _arity_error("HDEL")
        fields = self._hash_for_read(args[0])
        if fields is None:
            return Reply.failure(_WRONGTYPE)
        removed = sum(1 for field in args[1:] if fields.pop(field, None) is not None)
        if not fields:
            _ = self._store.pop(args[0], None)
        return Reply.success(str(removed))

    def _hkeys(self, args: list[str]) -> Reply:
        if len(args) != 1:
            return _arity_error("HKEYS")
        fields = self._hash_for_read(args[0])
        if fields is None:
            return Reply.failure(_WRONGTYPE)
        return Reply.success(list(fields))

    def _hget(self, args: list[str]) -> Reply:
        if len(args) != 2:
            return _arity_error("HGET")
        fields = self._hash_for_read(args[0])
        if fields is None:
            return Reply.failure(_WRONGTYPE)
        return Reply.success(fields.get(args[1]))

    def _hscan(self, args: list[str]) -> Reply:
        if len(args) < 2 or len(args) % 2 != 0:
            return _arity_error("HSCAN")
        key, cursor, options = args[0], args[1], args[2:]
        if not cursor.isdigit():
            return Reply.failure("ERR invalid cursor")

        pattern = "*"
        count = self._page_size
        for index in range(0, len(options), 2):
            option, argument = options[index].upper(), options[index + 1]
            if option == "MATCH":
                pattern = argument
            elif option == "COUNT" and argument.isdigit() and int(argument) > 0:
                count = int(argument)
            else:
                return Reply.failure("ERR syntax error")

        fields = self._hash_for_read(key)
        if fields is None:
            return Reply.failure(_WRONGTYPE)

        start = int(cursor)
        names = list(fields)
        page = names[start : start + count]
        next_cursor = start + count if start + count < len(names) else 0

        flat: list[str] = []
        for field in page:
            if fnmatchcase(field, pattern):
                flat.extend((field, fields[field]))
        return Reply.success([str(next_cursor), flat])
