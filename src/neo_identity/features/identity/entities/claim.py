"""Claim value object and the per-owner claim row records."""

from dataclasses import dataclass, field
from uuid import UUID

from ....utils.uuid import generate_uuid_v7


@dataclass(frozen=True)
class Claim:
    """Immutable type/value assertion about a user or role."""

    type: str
    value: str

    def __str__(self) -> str:
        return f"{self.type}: {self.value}"


@dataclass
class UserClaim:
    """Row in identity_user_claims."""

    user_id: UUID
    claim_type: str
    claim_value: str
    id: UUID = field(default_factory=generate_uuid_v7)

    @classmethod
    def from_claim(cls, user_id: UUID, claim: Claim) -> "UserClaim":
        return cls(user_id=user_id, claim_type=claim.type, claim_value=claim.value)

    def to_claim(self) -> Claim:
        return Claim(self.claim_type, self.claim_value)


@dataclass
class RoleClaim:
    """Row in identity_role_claims."""

    role_id: UUID
    claim_type: str
    claim_value: str
    id: UUID = field(default_factory=generate_uuid_v7)

    @classmethod
    def from_claim(cls, role_id: UUID, claim: Claim) -> "RoleClaim":
        return cls(role_id=role_id, claim_type=claim.type, claim_value=claim.value)

    def to_claim(self) -> Claim:
        return Claim(self.claim_type, self.claim_value)
