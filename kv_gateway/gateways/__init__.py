"""Gateway operation groups and the combined facade."""

from .gateway import KVGateway
from .hashes import HashGateway
from .scans import ScanGateway
from .values import ValueGateway


__all__ = ["HashGateway", "KVGateway", "ScanGateway", "ValueGateway"]
