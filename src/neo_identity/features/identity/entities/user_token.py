"""Authentication token records."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class UserToken:
    """Named value scoped by (user, login provider, name)."""

    user_id: UUID
    login_provider: str
    name: str
    value: Optional[str] = None

    def matches(self, login_provider: str, name: str) -> bool:
        return self.login_provider == login_provider and self.name == name
