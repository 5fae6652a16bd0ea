"""Field accessor capabilities of the user store.

These only read and assign IdentityUser attributes; nothing is written until
UserStore.update is called. Email lookup is the one operation that queries.
"""

import logging
from datetime import datetime, timezone
from typing import NoReturn, Optional

from ....core.cancellation import CancellationToken
from ....core.exceptions import OperationNotSupportedError
from ..entities.user import IdentityUser
from ..repositories.users_repository import UsersRepository
from .base import StoreCapability

logger = logging.getLogger(__name__)


class UserEmailCapability(StoreCapability):
    """Email, normalized email and confirmation flag."""

    def __init__(self, users: UsersRepository):
        self._users = users

    async def get_email(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        self._guard("get_email", cancellation, user=user)
        return user.email

    async def set_email(
        self, user: IdentityUser, email: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_email", cancellation, user=user)
        user.email = email

    async def get_email_confirmed(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> bool:
        self._guard("get_email_confirmed", cancellation, user=user)
        return user.email_confirmed

    async def set_email_confirmed(
        self, user: IdentityUser, confirmed: bool, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_email_confirmed", cancellation, user=user)
        user.email_confirmed = confirmed

    async def get_normalized_email(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        self._guard("get_normalized_email", cancellation, user=user)
        return user.normalized_email

    async def set_normalized_email(
        self, user: IdentityUser, normalized_email: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_normalized_email", cancellation, user=user)
        user.normalized_email = normalized_email

    async def find_by_email(
        self, normalized_email: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        self._guard("find_by_email", cancellation, normalized_email=normalized_email)
        return await self._users.find_by_email(normalized_email, cancellation)


class UserPasswordCapability(StoreCapability):
    """Password hash storage."""

    async def get_password_hash(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        self._guard("get_password_hash", cancellation, user=user)
        return user.password_hash

    async def set_password_hash(
        self, user: IdentityUser, password_hash: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_password_hash", cancellation, user=user)
        user.password_hash = password_hash

    async def has_password(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> bool:
        self._guard("has_password", cancellation, user=user)
        return user.password_hash is not None


class UserPhoneNumberCapability(StoreCapability):

    async def get_phone_number(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        self._guard("get_phone_number", cancellation, user=user)
        return user.phone_number

    async def set_phone_number(
        self, user: IdentityUser, phone_number: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_phone_number", cancellation, user=user)
        user.phone_number = phone_number

    async def get_phone_number_confirmed(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        self._guard("get_phone_number_confirmed", cancellation, user=user)
        return user.phone_number_confirmed

    async def set_phone_number_confirmed(
        self, user: IdentityUser, confirmed: bool, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_phone_number_confirmed", cancellation, user=user)
        user.phone_number_confirmed = confirmed


class UserTwoFactorCapability(StoreCapability):

    async def get_two_factor_enabled(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        self._guard("get_two_factor_enabled", cancellation, user=user)
        return user.two_factor_enabled

    async def set_two_factor_enabled(
        self, user: IdentityUser, enabled: bool, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_two_factor_enabled", cancellation, user=user)
        user.two_factor_enabled = enabled


class UserSecurityStampCapability(StoreCapability):

    async def get_security_stamp(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        self._guard("get_security_stamp", cancellation, user=user)
        return user.security_stamp

    async def set_security_stamp(
        self, user: IdentityUser, stamp: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_security_stamp", cancellation, user=user, stamp=stamp)
        user.security_stamp = stamp


class UserLockoutCapability(StoreCapability):
    """Lockout end, lockout enablement and the failed access counter."""

    async def get_lockout_end_date(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[datetime]:
        self._guard("get_lockout_end_date", cancellation, user=user)
        return user.lockout_end

    async def set_lockout_end_date(
        self, user: IdentityUser, lockout_end: Optional[datetime], cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Store the lockout end in UTC; naive datetimes are taken to be UTC already."""
        self._guard("set_lockout_end_date", cancellation, user=user)
        if lockout_end is None:
            user.lockout_end = None
        elif lockout_end.tzinfo is None:
            user.lockout_end = lockout_end.replace(tzinfo=timezone.utc)
        else:
            user.lockout_end = lockout_end.astimezone(timezone.utc)

    async def increment_access_failed_count(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> int:
        self._guard("increment_access_failed_count", cancellation, user=user)
        user.access_failed_count += 1
        return user.access_failed_count

    async def reset_access_failed_count(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("reset_access_failed_count", cancellation, user=user)
        user.access_failed_count = 0

    async def get_access_failed_count(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> int:
        self._guard("get_access_failed_count", cancellation, user=user)
        return user.access_failed_count

    async def get_lockout_enabled(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> bool:
        self._guard("get_lockout_enabled", cancellation, user=user)
        return user.lockout_enabled

    async def set_lockout_enabled(
        self, user: IdentityUser, enabled: bool, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_lockout_enabled", cancellation, user=user)
        user.lockout_enabled = enabled


class UserAuthenticatorKeyCapability(StoreCapability):
    """Authenticator keys are not stored by this package.

    Both accessors raise OperationNotSupportedError for any input, before
    argument or cancellation checks.
    """

    async def get_authenticator_key(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> NoReturn:
        raise OperationNotSupportedError("get_authenticator_key")

    async def set_authenticator_key(
        self, user: IdentityUser, key: str, cancellation: Optional[CancellationToken] = None
    ) -> NoReturn:
        raise OperationNotSupportedError("set_authenticator_key")
