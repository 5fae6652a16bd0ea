"""Role identity entity."""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from ....utils.uuid import generate_uuid_v7, new_stamp
from .claim import Claim
from .lazy import LazyCollection


@dataclass(eq=False)
class IdentityRole:
    """A named role; owns an on-demand collection of claims."""

    name: Optional[str] = None
    normalized_name: Optional[str] = None
    concurrency_stamp: Optional[str] = field(default_factory=new_stamp)
    id: UUID = field(default_factory=generate_uuid_v7)

    claims: LazyCollection[Claim] = field(
        default_factory=lambda: LazyCollection("claims"), init=False, repr=False
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdentityRole):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
