"""
Team DTOs for API responses.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from notifications.ports.email_sender import SendResult
from teams.domain.invitation import Invitation
from teams.domain.member import TeamMember
from teams.domain.team import Team


@dataclass
class CreateTeamResult:
    """Result of creating a team."""

    team: Team
    owner: TeamMember
    relocated_licenses: int = 0


@dataclass
class InviteMemberResult:
    """Result of issuing an invitation."""

    invitation: Invitation
    notification: SendResult

    @property
    def email_sent(self) -> bool:
        return self.notification.success


@dataclass
class TeamOverviewDTO:
    """
    Team screen of an admin.

    ``team`` is None for a solo admin; the lists are then empty.
    """

    team: Optional[Team]
    role: Optional[str] = None
    is_owner: bool = False
    members: List[TeamMember] = field(default_factory=list)
    invitations: List[Invitation] = field(default_factory=list)
