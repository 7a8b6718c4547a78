"""
Team member handlers.

Owner-only handlers for changing roles, removing members and renaming the
team.
"""

from typing import Optional

from core.domain.events import EventBus
from core.domain.exceptions import CannotRemoveOwnerError, MemberNotFoundError, TeamNotFoundError
from core.infrastructure.events import event_bus as default_event_bus
from teams.application.commands.remove_member import RemoveMemberCommand
from teams.application.commands.rename_team import RenameTeamCommand
from teams.application.commands.update_member_role import UpdateMemberRoleCommand
from teams.domain.events import MemberRemoved, MemberRoleChanged, TeamRenamed
from teams.domain.member import TeamMember, parse_assignable_role
from teams.domain.services import TeamPolicy
from teams.domain.team import Team
from teams.ports.team_repository import TeamMemberRepository, TeamRepository


class _OwnerHandler:
    def __init__(
        self,
        member_repository: TeamMemberRepository,
        event_bus: Optional[EventBus] = None,
    ):
        self.member_repository = member_repository
        self.event_bus = event_bus or default_event_bus

    async def _ensure_owner(self, actor_id, team_id) -> TeamMember:
        actor = await self.member_repository.find_by_admin(actor_id)
        return TeamPolicy.ensure_owner(actor, team_id)

    async def _get_member(self, member_id, team_id) -> TeamMember:
        member = await self.member_repository.find_by_id(member_id)
        if member is None or member.team_id != team_id:
            raise MemberNotFoundError()
        return member


class UpdateMemberRoleHandler(_OwnerHandler):
    """Handler for UpdateMemberRoleCommand."""

    async def handle(self, command: UpdateMemberRoleCommand) -> TeamMember:
        """
        Handle update member role command.

        Args:
            command: UpdateMemberRoleCommand

        Returns:
            Updated member

        Raises:
            ForbiddenError: If the actor is not the team owner
            InvalidRoleError: If the role is not admin or member
            MemberNotFoundError: If the member is not in the team
            CannotDemoteOwnerError: If the target is the owner
        """
        await self._ensure_owner(command.actor_id, command.team_id)
        new_role = parse_assignable_role(command.role)
        member = await self._get_member(command.member_id, command.team_id)

        old_role = member.role
        updated = await self.member_repository.save(member.change_role(new_role))

        await self.event_bus.publish(
            MemberRoleChanged(
                member_id=member.id,
                team_id=member.team_id,
                admin_id=member.admin_id,
                old_role=old_role.value,
                new_role=new_role.value,
                actor_id=command.actor_id,
            )
        )
        return updated


class RemoveMemberHandler(_OwnerHandler):
    """Handler for RemoveMemberCommand."""

    async def handle(self, command: RemoveMemberCommand) -> None:
        """
        Handle remove member command.

        Args:
            command: RemoveMemberCommand

        Raises:
            ForbiddenError: If the actor is not the team owner
            MemberNotFoundError: If the member is not in the team
            CannotRemoveOwnerError: If the target is the owner
        """
        await self._ensure_owner(command.actor_id, command.team_id)
        member = await self._get_member(command.member_id, command.team_id)
        if member.is_owner:
            raise CannotRemoveOwnerError()

        await self.member_repository.delete(member.id)

        await self.event_bus.publish(
            MemberRemoved(
                member_id=member.id,
                team_id=member.team_id,
                admin_id=member.admin_id,
                actor_id=command.actor_id,
            )
        )


class RenameTeamHandler(_OwnerHandler):
    """Handler for RenameTeamCommand."""

    def __init__(
        self,
        team_repository: TeamRepository,
        member_repository: TeamMemberRepository,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(member_repository, event_bus)
        self.team_repository = team_repository

    async def handle(self, command: RenameTeamCommand) -> Team:
        """
        Handle rename team command.

        Args:
            command: RenameTeamCommand

        Returns:
            Renamed team

        Raises:
            ForbiddenError: If the actor is not the team owner
            TeamNotFoundError: If the team does not exist
            ValidationError: If the name is blank or longer than 255 characters
        """
        await self._ensure_owner(command.actor_id, command.team_id)
        team = await self.team_repository.find_by_id(command.team_id)
        if team is None:
            raise TeamNotFoundError()

        renamed = await self.team_repository.save(team.rename(command.name))

        await self.event_bus.publish(
            TeamRenamed(
                team_id=team.id,
                actor_id=command.actor_id,
                old_name=team.name,
                new_name=renamed.name,
            )
        )
        return renamed
