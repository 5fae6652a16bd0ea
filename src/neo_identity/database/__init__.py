"""Database connection handling for neo-identity."""

from .connection import PostgresConnectionFactory
from .protocols import DatabaseConnectionFactory
from .utils import (
    map_record,
    normalize_dsn,
    record_to_dict,
    snake_case_columns,
)

__all__ = [
    "PostgresConnectionFactory",
    "DatabaseConnectionFactory",
    "map_record",
    "normalize_dsn",
    "record_to_dict",
    "snake_case_columns",
]
