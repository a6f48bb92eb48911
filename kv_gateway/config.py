"""Gateway configuration settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Mapping


DEFAULT_URL = "redis://localhost:6379/0"

# Maximum field/value pairs sent in one HMSET command
DEFAULT_HMSET_CHUNK_SIZE = 256

DEFAULT_SCAN_MAX_PAGES = 100_000

_TRUTHY = {"1", "true", "yes", "on"}


def _optional_int(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    return int(raw)


@dataclass(frozen=True)
class GatewaySettings:
    """Tunables shared by every gateway operation."""

    url: str = DEFAULT_URL
    hmset_chunk_size: int = DEFAULT_HMSET_CHUNK_SIZE
    scan_max_pages: int = DEFAULT_SCAN_MAX_PAGES
    scan_count: int | None = None
    check_writes: bool = False

    def __post_init__(self) -> None:
        if self.hmset_chunk_size < 1:
            msg = "hmset_chunk_size must be at least 1"
            raise ValueError(msg)
        if self.scan_max_pages < 1:
            msg = "scan_max_pages must be at least 1"
            raise ValueError(msg)
        if self.scan_count is not None and self.scan_count < 1:
            msg = "scan_count must be at least 1"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GatewaySettings:
        """Build settings from ``KV_GATEWAY_*`` environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            url=env.get("KV_GATEWAY_URL", DEFAULT_URL),
            hmset_chunk_size=int(env.get("KV_GATEWAY_HMSET_CHUNK_SIZE", DEFAULT_HMSET_CHUNK_SIZE)),
            scan_max_pages=int(env.get("KV_GATEWAY_SCAN_MAX_PAGES", DEFAULT_SCAN_MAX_PAGES)),
            scan_count=_optional_int(env.get("KV_GATEWAY_SCAN_COUNT")),
            check_writes=env.get("KV_GATEWAY_CHECK_WRITES", "false").strip().lower() in _TRUTHY,
        )
