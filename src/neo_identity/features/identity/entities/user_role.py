"""Role membership association."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class UserRole:
    """Links a user to a role by id, with the role name denormalized."""

    role_id: UUID
    role_name: Optional[str] = None
    normalized_role_name: Optional[str] = None
