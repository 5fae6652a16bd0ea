"""External login records."""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class UserLoginInfo:
    """A (provider, provider key) pair linking a local account to an external identity.

    The display name is informational and does not take part in equality.
    """

    login_provider: str
    provider_key: str
    provider_display_name: Optional[str] = field(default=None, compare=False)

    def matches(self, login_provider: str, provider_key: str) -> bool:
        return self.login_provider == login_provider and self.provider_key == provider_key


@dataclass
class UserLogin:
    """Row in identity_user_logins."""

    user_id: UUID
    login_provider: str
    provider_key: str
    provider_display_name: Optional[str] = None

    def to_login_info(self) -> UserLoginInfo:
        return UserLoginInfo(self.login_provider, self.provider_key, self.provider_display_name)
