"""
Invitation domain entity.

State machine:
    pending --accept--> accepted
    pending --cancel--> cancelled
    pending --[now > expires_at]--> expired

Expiry is not written when it happens; readers apply it with
``with_expiry_applied``.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from core.domain.exceptions import InvalidInvitationStateError
from core.domain.value_objects import Email, InvitationStatus, TeamRole

DEFAULT_TTL_DAYS = 7


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Invitation:
    """Team invitation entity."""

    id: uuid.UUID
    team_id: uuid.UUID
    email: Email
    role: TeamRole
    status: InvitationStatus
    invited_by: uuid.UUID
    expires_at: datetime
    created_at: datetime
    message_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        team_id: uuid.UUID,
        email: Email,
        role: TeamRole,
        invited_by: uuid.UUID,
        ttl_days: int = DEFAULT_TTL_DAYS,
        now: Optional[datetime] = None,
    ) -> "Invitation":
        """
        Create a pending invitation.

        Args:
            team_id: Team UUID
            email: Invitee email
            role: Role granted on acceptance
            invited_by: Admin UUID of the inviter
            ttl_days: Days until the invitation expires
            now: Creation time (defaults to current UTC time)

        Returns:
            Invitation entity instance
        """
        now = now or _now()
        return cls(
            id=uuid.uuid4(),
            team_id=team_id,
            email=email,
            role=role,
            status=InvitationStatus.PENDING,
            invited_by=invited_by,
            expires_at=now + timedelta(days=ttl_days),
            created_at=now,
        )

    def effective_status(self, now: Optional[datetime] = None) -> InvitationStatus:
        if self.status is InvitationStatus.PENDING and (now or _now()) > self.expires_at:
            return InvitationStatus.EXPIRED
        return self.status

    def is_pending(self, now: Optional[datetime] = None) -> bool:
        return self.effective_status(now) is InvitationStatus.PENDING

    def with_expiry_applied(self, now: Optional[datetime] = None) -> "Invitation":
        status = self.effective_status(now)
        if status is self.status:
            return self
        return replace(self, status=status)

    def cancel(self, now: Optional[datetime] = None) -> "Invitation":
        """
        Cancel a pending invitation.

        Raises:
            InvalidInvitationStateError: If the invitation is not pending
        """
        if not self.is_pending(now):
            raise InvalidInvitationStateError(
                f"Invitation is {self.effective_status(now).value} and cannot be cancelled"
            )
        return replace(self, status=InvitationStatus.CANCELLED)

    def accept(self, now: Optional[datetime] = None) -> "Invitation":
        """
        Accept a pending invitation.

        Raises:
            InvalidInvitationStateError: If the invitation is not pending
        """
        if not self.is_pending(now):
            raise InvalidInvitationStateError(
                f"Invitation is {self.effective_status(now).value} and cannot be accepted"
            )
        return replace(self, status=InvitationStatus.ACCEPTED)

    def record_message(self, message_id: Optional[str]) -> "Invitation":
        return replace(self, message_id=message_id)
