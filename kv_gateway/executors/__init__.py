"""Command executor contracts and implementations."""

from .in_memory import InMemoryExecutor
from .protocol import CommandExecutor, Reply
from .redis import RedisExecutor


__all__ = ["CommandExecutor", "InMemoryExecutor", "RedisExecutor", "Reply"]
