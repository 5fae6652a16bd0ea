"""Argument guards used at the store boundary."""

from typing import Any, TypeVar

from ..core.exceptions import InvalidArgumentError

T = TypeVar("T")


def throw_if_none(value: T, argument_name: str) -> T:
    """Return value unchanged, or raise InvalidArgumentError when it is None."""
    if value is None:
        raise InvalidArgumentError(argument_name)
    return value


def throw_if_any_none(**arguments: Any) -> None:
    """Check several required arguments in declaration order."""
    for name, value in arguments.items():
        throw_if_none(value, name)
