"""kv-gateway - transparent value encoding and hash scanning over Redis"""

from ._version import version as __version__
from .codec import ValueCodec
from .config import GatewaySettings
from .errors import (
    CommandError,
    DecodeError,
    EncodeError,
    KVGatewayError,
    ScanNotConvergedError,
    UnexpectedReplyError,
)
from .executors import CommandExecutor, InMemoryExecutor, RedisExecutor, Reply
from .gateways import KVGateway
from .results import Lookup, LookupStatus


__all__ = [
    "CommandError",
    "CommandExecutor",
    "DecodeError",
    "EncodeError",
    "GatewaySettings",
    "InMemoryExecutor",
    "KVGateway",
    "KVGatewayError",
    "Lookup",
    "LookupStatus",
    "RedisExecutor",
    "Reply",
    "ScanNotConvergedError",
    "UnexpectedReplyError",
    "ValueCodec",
    "__version__",
]
