"""
Database utility functions for row mapping and DSN handling.
"""

import dataclasses
import re
from typing import Any, Callable, Dict, Type, TypeVar

T = TypeVar("T")

DRIVER_SUFFIX_PATTERN = re.compile(r"^(postgres(?:ql)?)\+asyncpg://")

ColumnNameConvention = Callable[[str], str]


def snake_case_columns(column_name: str) -> str:
    """Default convention: snake_case columns map onto identically named fields."""
    return column_name


def normalize_dsn(dsn: str) -> str:
    """Strip a SQLAlchemy-style driver suffix so asyncpg accepts the DSN."""
    return DRIVER_SUFFIX_PATTERN.sub(r"\1://", dsn)


def record_to_dict(
    record: Any,
    convention: ColumnNameConvention = snake_case_columns
) -> Dict[str, Any]:
    """Convert an asyncpg.Record (or mapping) to a dict keyed by field name."""
    return {convention(key): value for key, value in dict(record).items()}


def map_record(
    record: Any,
    entity_type: Type[T],
    convention: ColumnNameConvention = snake_case_columns
) -> T:
    """Build a dataclass instance from a row.

    Columns without a matching init field are ignored; fields without a
    column keep their defaults.
    """
    if not dataclasses.is_dataclass(entity_type):
        raise TypeError(f"{entity_type!r} is not a dataclass")

    field_names = {f.name for f in dataclasses.fields(entity_type) if f.init}
    data = record_to_dict(record, convention)
    return entity_type(**{name: value for name, value in data.items() if name in field_names})
