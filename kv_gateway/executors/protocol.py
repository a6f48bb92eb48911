"""Command executor interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True)
class Reply:
    """Status plus result of one command.

    ``value`` is ``None``, a string, or a list of strings and nested lists.
    """

    ok: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def success(cls, value: Any = None) -> Reply:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> Reply:
        return cls(ok=False, error=error)


class CommandExecutor(ABC):
    """Async request/response channel to a Redis-compatible store."""

    @abstractmethod
    async def execute(self, tokens: Sequence[str]) -> Reply:
        """Run one command given as ordered string tokens."""

    @abstractmethod
    async def close(self) -> None:
        """Close any executor resources."""
