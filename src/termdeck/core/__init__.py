"""Core module - identifier utilities"""

from .ids import IdGenerator, IdKind, ParsedId, get_kind, parse_id, short_id

__all__ = [
    "IdGenerator",
    "IdKind",
    "ParsedId",
    "parse_id",
    "get_kind",
    "short_id",
]
