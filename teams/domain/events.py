"""
Team domain events.

Domain events represent something that happened in the team domain.
"""

import uuid
from typing import Any, Dict

from core.domain.events import DomainEvent


class TeamCreated(DomainEvent):
    """Event raised when an admin creates a team."""

    def __init__(
        self,
        team_id: uuid.UUID,
        owner_id: uuid.UUID,
        name: str,
        domain: str,
        relocated_licenses: int = 0,
    ):
        """
        Initialize TeamCreated event.

        Args:
            team_id: Team UUID
            owner_id: Admin UUID of the owner
            name: Team name
            domain: Team email domain
            relocated_licenses: Solo licenses moved into the team
        """
        super().__init__(**self._base(team_id))
        self._team_id = team_id
        self.actor_id = owner_id
        self.name = name
        self.domain = domain
        self.relocated_licenses = relocated_licenses

    def data(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "domain": self.domain,
            "relocated_licenses": self.relocated_licenses,
        }


class TeamRenamed(DomainEvent):
    """Event raised when the owner renames a team."""

    def __init__(self, team_id: uuid.UUID, actor_id: uuid.UUID, old_name: str, new_name: str):
        super().__init__(**self._base(team_id))
        self._team_id = team_id
        self.actor_id = actor_id
        self.old_name = old_name
        self.new_name = new_name

    def data(self) -> Dict[str, Any]:
        return {"old_name": self.old_name, "new_name": self.new_name}


class MemberInvited(DomainEvent):
    """Event raised when an invitation is issued."""

    def __init__(
        self,
        invitation_id: uuid.UUID,
        team_id: uuid.UUID,
        email: str,
        role: str,
        invited_by: uuid.UUID,
    ):
        super().__init__(**self._base(invitation_id))
        self._team_id = team_id
        self.actor_id = invited_by
        self.invitation_id = invitation_id
        self.email = email
        self.role = role

    def data(self) -> Dict[str, Any]:
        return {"invitation_id": str(self.invitation_id), "email": self.email, "role": self.role}


class InvitationCancelled(DomainEvent):
    """Event raised when a pending invitation is cancelled."""

    def __init__(
        self, invitation_id: uuid.UUID, team_id: uuid.UUID, email: str, actor_id: uuid.UUID
    ):
        super().__init__(**self._base(invitation_id))
        self._team_id = team_id
        self.actor_id = actor_id
        self.invitation_id = invitation_id
        self.email = email

    def data(self) -> Dict[str, Any]:
        return {"invitation_id": str(self.invitation_id), "email": self.email}


class MemberRoleChanged(DomainEvent):
    """Event raised when the owner changes a member's role."""

    def __init__(
        self,
        member_id: uuid.UUID,
        team_id: uuid.UUID,
        admin_id: uuid.UUID,
        old_role: str,
        new_role: str,
        actor_id: uuid.UUID,
    ):
        super().__init__(**self._base(member_id))
        self._team_id = team_id
        self.actor_id = actor_id
        self.member_id = member_id
        self.admin_id = admin_id
        self.old_role = old_role
        self.new_role = new_role

    def data(self) -> Dict[str, Any]:
        return {
            "member_id": str(self.member_id),
            "admin_id": str(self.admin_id),
            "old_role": self.old_role,
            "new_role": self.new_role,
        }


class MemberRemoved(DomainEvent):
    """Event raised when the owner removes a member."""

    def __init__(
        self, member_id: uuid.UUID, team_id: uuid.UUID, admin_id: uuid.UUID, actor_id: uuid.UUID
    ):
        super().__init__(**self._base(member_id))
        self._team_id = team_id
        self.actor_id = actor_id
        self.member_id = member_id
        self.admin_id = admin_id

    def data(self) -> Dict[str, Any]:
        return {"member_id": str(self.member_id), "admin_id": str(self.admin_id)}
