"""
GetTeamOverviewHandler.

Handler for the team screen: team, the caller's role, members and pending
invitations.
"""

from datetime import datetime, timezone

from core.domain.value_objects import InvitationStatus
from teams.application.dto.team_dto import TeamOverviewDTO
from teams.application.queries.get_team_overview import GetTeamOverviewQuery
from teams.ports.team_repository import (
    InvitationRepository,
    TeamMemberRepository,
    TeamRepository,
)


class GetTeamOverviewHandler:
    """Handler for GetTeamOverviewQuery."""

    def __init__(
        self,
        team_repository: TeamRepository,
        member_repository: TeamMemberRepository,
        invitation_repository: InvitationRepository,
    ):
        """Initialize handler with repositories."""
        self.team_repository = team_repository
        self.member_repository = member_repository
        self.invitation_repository = invitation_repository

    async def handle(self, query: GetTeamOverviewQuery) -> TeamOverviewDTO:
        """
        Handle team overview query.

        Invitations past their expiry are reported as expired and left out of
        the pending list.

        Args:
            query: GetTeamOverviewQuery

        Returns:
            TeamOverviewDTO; ``team`` is None for a solo admin
        """
        membership = await self.member_repository.find_by_admin(query.admin_id)
        if membership is None:
            return TeamOverviewDTO(team=None)

        team = await self.team_repository.find_by_id(membership.team_id)
        if team is None:
            return TeamOverviewDTO(team=None)

        now = datetime.now(timezone.utc)
        stored = await self.invitation_repository.list_by_team(
            team.id, stored_status=InvitationStatus.PENDING.value
        )
        pending = [
            invitation for invitation in (i.with_expiry_applied(now) for i in stored)
            if invitation.status is InvitationStatus.PENDING
        ]

        return TeamOverviewDTO(
            team=team,
            role=membership.role.value,
            is_owner=membership.is_owner,
            members=await self.member_repository.find_by_team(team.id),
            invitations=pending,
        )
