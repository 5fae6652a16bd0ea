"""Utility helpers for neo-identity."""

from .uuid import generate_uuid_v7, new_stamp, parse_uuid
from .guards import throw_if_none

__all__ = [
    "generate_uuid_v7",
    "new_stamp",
    "parse_uuid",
    "throw_if_none",
]
