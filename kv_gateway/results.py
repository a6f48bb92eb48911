"""Result types for read operations."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from kv_gateway.errors import CommandError


class LookupStatus(enum.Enum):
    FOUND = "found"
    MISSING = "missing"
    FAILED = "failed"


@dataclass(frozen=True)
class Lookup:
    """Outcome of a single read: a value, an absence, or an executor failure."""

    status: LookupStatus
    value: Any = None
    error: str | None = None
    command: tuple[str, ...] = field(default=())

    @classmethod
    def found(cls, value: Any) -> Lookup:
        return cls(LookupStatus.FOUND, value=value)

    @classmethod
    def missing(cls) -> Lookup:
        return cls(LookupStatus.MISSING)

    @classmethod
    def failed(cls, command: tuple[str, ...], error: str | None) -> Lookup:
        return cls(LookupStatus.FAILED, error=error, command=command)

    @property
    def ok(self) -> bool:
        return self.status is not LookupStatus.FAILED

    def unwrap(self) -> Any:
        """Return the value, ``None`` when missing, or raise on failure."""
        if self.status is LookupStatus.FAILED:
            raise CommandError(self.command, self.error)
        return self.value
