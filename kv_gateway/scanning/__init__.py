"""Cursor-driven hash scanning utilities."""

from .engine import INITIAL_CURSOR, TERMINAL_CURSOR, scan_pages
from .pages import pair_fields, parse_scan_reply


__all__ = ["INITIAL_CURSOR", "TERMINAL_CURSOR", "pair_fields", "parse_scan_reply", "scan_pages"]
