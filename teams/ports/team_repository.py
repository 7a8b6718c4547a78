"""
Team repository ports (interfaces).

This defines the contract for team, membership and invitation persistence.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from teams.domain.invitation import Invitation
from teams.domain.member import TeamMember
from teams.domain.team import Team


class TeamRepository(ABC):
    """Abstract repository for Team entities."""

    @abstractmethod
    async def save(self, team: Team) -> Team:
        """
        Save a team (create or update).

        Args:
            team: Team entity to save

        Returns:
            Saved team entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, team_id: uuid.UUID) -> Optional[Team]:
        """
        Find a team by ID.

        Args:
            team_id: Team UUID

        Returns:
            Team entity or None if not found
        """
        pass

    @abstractmethod
    async def delete(self, team_id: uuid.UUID) -> None:
        """Delete a team. Used to undo a half-created team."""
        pass


class TeamMemberRepository(ABC):
    """Abstract repository for TeamMember entities."""

    @abstractmethod
    async def add(self, member: TeamMember) -> TeamMember:
        """
        Insert a membership.

        Args:
            member: TeamMember entity

        Returns:
            Saved member

        Raises:
            AlreadyInTeamError: If the admin already has a membership
        """
        pass

    @abstractmethod
    async def save(self, member: TeamMember) -> TeamMember:
        """Update an existing membership."""
        pass

    @abstractmethod
    async def find_by_id(self, member_id: uuid.UUID) -> Optional[TeamMember]:
        pass

    @abstractmethod
    async def find_by_admin(self, admin_id: uuid.UUID) -> Optional[TeamMember]:
        """
        Find the membership of an admin.

        Args:
            admin_id: Admin UUID

        Returns:
            TeamMember or None when the admin is solo
        """
        pass

    @abstractmethod
    async def find_by_team(self, team_id: uuid.UUID) -> List[TeamMember]:
        """
        List members of a team, owner first.

        Args:
            team_id: Team UUID

        Returns:
            Members with email and full_name populated
        """
        pass

    @abstractmethod
    async def delete(self, member_id: uuid.UUID) -> None:
        pass


class InvitationRepository(ABC):
    """Abstract repository for Invitation entities."""

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """
        Save an invitation (create or update).

        Args:
            invitation: Invitation entity

        Returns:
            Saved invitation
        """
        pass

    @abstractmethod
    async def find_by_id(self, invitation_id: uuid.UUID) -> Optional[Invitation]:
        pass

    @abstractmethod
    async def find_pending(self, team_id: uuid.UUID, email: str) -> Optional[Invitation]:
        """
        Find the newest invitation stored as pending for an email.

        Expiry is not applied; callers check ``is_pending``.
        """
        pass

    @abstractmethod
    async def list_by_team(
        self, team_id: uuid.UUID, stored_status: Optional[str] = None
    ) -> List[Invitation]:
        """
        List invitations of a team, newest first.

        Args:
            team_id: Team UUID
            stored_status: Filter on the persisted status

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def list_stale_pending(self, now) -> List[Invitation]:
        """List invitations stored as pending whose expiry has passed."""
        pass
