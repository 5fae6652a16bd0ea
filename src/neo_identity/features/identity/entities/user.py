"""User identity entity.

Maps to the identity_users table. Sub-collections (claims, logins, roles,
tokens) are not columns; they are LazyCollections filled by the user store's
explicit load steps and written back by UsersRepository.create/update.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from ....utils.uuid import generate_uuid_v7, new_stamp
from .claim import Claim
from .lazy import LazyCollection
from .login import UserLoginInfo
from .user_role import UserRole
from .user_token import UserToken


USER_COLUMNS = (
    "id",
    "user_name",
    "normalized_user_name",
    "email",
    "normalized_email",
    "email_confirmed",
    "password_hash",
    "security_stamp",
    "concurrency_stamp",
    "phone_number",
    "phone_number_confirmed",
    "two_factor_enabled",
    "lockout_end",
    "lockout_enabled",
    "access_failed_count",
)


@dataclass(eq=False)
class IdentityUser:
    """A user account; identity is the id, generated client-side."""

    user_name: Optional[str] = None
    normalized_user_name: Optional[str] = None
    email: Optional[str] = None
    normalized_email: Optional[str] = None
    email_confirmed: bool = False
    password_hash: Optional[str] = None
    security_stamp: Optional[str] = None
    concurrency_stamp: Optional[str] = field(default_factory=new_stamp)
    phone_number: Optional[str] = None
    phone_number_confirmed: bool = False
    two_factor_enabled: bool = False
    lockout_end: Optional[datetime] = None
    lockout_enabled: bool = False
    access_failed_count: int = 0
    id: UUID = field(default_factory=generate_uuid_v7)

    # Loaded on demand, never mapped from a row
    claims: LazyCollection[Claim] = field(
        default_factory=lambda: LazyCollection("claims"), init=False, repr=False
    )
    logins: LazyCollection[UserLoginInfo] = field(
        default_factory=lambda: LazyCollection("logins"), init=False, repr=False
    )
    roles: LazyCollection[UserRole] = field(
        default_factory=lambda: LazyCollection("roles"), init=False, repr=False
    )
    tokens: LazyCollection[UserToken] = field(
        default_factory=lambda: LazyCollection("tokens"), init=False, repr=False
    )

    def column_values(self) -> tuple:
        """Values in USER_COLUMNS order, for parameterized statements."""
        return tuple(getattr(self, column) for column in USER_COLUMNS)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdentityUser):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
