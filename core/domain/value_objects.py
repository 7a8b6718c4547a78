"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import uuid
from abc import ABC
from dataclasses import dataclass
from enum import Enum

from core.domain.exceptions import InvalidEmailError


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """
    Email value object with validation.

    Use ``Email.normalize`` for user input: it trims and lowercases before
    validating, which is the form license uniqueness is checked on.
    """

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise InvalidEmailError(f"Invalid email address: {self.value}")

    @classmethod
    def normalize(cls, raw: str) -> "Email":
        """
        Build an Email from raw input.

        Args:
            raw: Email as typed by the admin

        Returns:
            Email with surrounding whitespace removed and lowercased

        Raises:
            InvalidEmailError: If the result is empty or has no '@'
        """
        if not isinstance(raw, str):
            raise InvalidEmailError(f"Invalid email address: {raw}")
        return cls(raw.strip().lower())

    @property
    def domain(self) -> str:
        """Part after the last '@'."""
        return self.value.rsplit("@", 1)[1]

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


class ScopeKind(Enum):
    """Kind of organization that owns licenses and quota."""

    TEAM = "team"
    ADMIN = "admin"

    def __str__(self) -> str:
        """Return kind as string."""
        return self.value


@dataclass(frozen=True)
class Scope(ValueObject):
    """
    Organization scope.

    Either ``TeamScope`` or ``SoloScope``; code that branches on scope
    should match on ``kind`` and handle both.
    """

    id: uuid.UUID

    kind = None

    @classmethod
    def of(cls, kind, scope_id) -> "Scope":
        """
        Rebuild a scope from its persisted parts.

        Args:
            kind: ScopeKind or its string value
            scope_id: UUID of the team or admin

        Returns:
            TeamScope or SoloScope
        """
        kind = ScopeKind(kind) if not isinstance(kind, ScopeKind) else kind
        if not isinstance(scope_id, uuid.UUID):
            scope_id = uuid.UUID(str(scope_id))
        if kind is ScopeKind.TEAM:
            return TeamScope(scope_id)
        return SoloScope(scope_id)

    @property
    def is_team(self) -> bool:
        return self.kind is ScopeKind.TEAM

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"


@dataclass(frozen=True)
class TeamScope(Scope):
    """Licenses and quota owned by a team."""

    kind = ScopeKind.TEAM


@dataclass(frozen=True)
class SoloScope(Scope):
    """Licenses and quota owned by an admin without a team."""

    kind = ScopeKind.ADMIN


class TeamRole(Enum):
    """Role of a team member."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"

    @property
    def can_invite(self) -> bool:
        """Owners and admins may invite and cancel invitations."""
        return self in (TeamRole.OWNER, TeamRole.ADMIN)

    def __str__(self) -> str:
        return self.value


class InvitationStatus(Enum):
    """Team invitation status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    def __str__(self) -> str:
        return self.value
