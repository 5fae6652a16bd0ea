"""Outcome of create, update and delete operations."""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class IdentityError:
    """Machine-readable failure code with a human description."""

    code: str
    description: str


@dataclass(frozen=True)
class IdentityResult:
    """Succeeded, or failed with one or more IdentityErrors."""

    succeeded: bool
    errors: Tuple[IdentityError, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls) -> "IdentityResult":
        return _SUCCESS

    @classmethod
    def failed(cls, *errors: IdentityError) -> "IdentityResult":
        return cls(succeeded=False, errors=tuple(errors))

    @property
    def error_codes(self) -> List[str]:
        return [error.code for error in self.errors]

    def __bool__(self) -> bool:
        return self.succeeded

    def __str__(self) -> str:
        if self.succeeded:
            return "Succeeded"
        return "Failed: " + ", ".join(self.error_codes)


_SUCCESS = IdentityResult(succeeded=True)


def concurrency_failure() -> IdentityError:
    return IdentityError(
        "ConcurrencyFailure",
        "Optimistic concurrency failure, object has been modified."
    )


def duplicate_error(entity_type: str, constraint: str = "") -> IdentityError:
    """Failure for a unique constraint violation."""
    description = f"{entity_type} violates a uniqueness constraint"
    if constraint:
        description += f" ({constraint})"
    return IdentityError(f"Duplicate{entity_type}", description + ".")
