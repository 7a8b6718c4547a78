"""
Invitation handlers.

Handlers for inviting an email into a team and cancelling invitations.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from admins.ports.admin_repository import AdminRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    AdminNotFoundError,
    AlreadyMemberError,
    DomainMismatchError,
    DuplicateInvitationError,
    InvitationNotFoundError,
    TeamNotFoundError,
)
from core.domain.value_objects import Email
from core.infrastructure.events import event_bus as default_event_bus
from notifications.application.workflow import InvitationWorkflow
from notifications.domain.brand import PartnerRegistry
from teams.application.commands.cancel_invitation import CancelInvitationCommand
from teams.application.commands.invite_member import InviteMemberCommand
from teams.application.dto.team_dto import InviteMemberResult
from teams.domain.events import InvitationCancelled, MemberInvited
from teams.domain.invitation import DEFAULT_TTL_DAYS, Invitation
from teams.domain.member import parse_assignable_role
from teams.domain.services import TeamPolicy
from teams.ports.team_repository import (
    InvitationRepository,
    TeamMemberRepository,
    TeamRepository,
)

logger = logging.getLogger(__name__)


class InviteMemberHandler:
    """Handler for InviteMemberCommand."""

    def __init__(
        self,
        admin_repository: AdminRepository,
        team_repository: TeamRepository,
        member_repository: TeamMemberRepository,
        invitation_repository: InvitationRepository,
        workflow: InvitationWorkflow,
        partner_registry: PartnerRegistry,
        ttl_days: int = DEFAULT_TTL_DAYS,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories and services."""
        self.admin_repository = admin_repository
        self.team_repository = team_repository
        self.member_repository = member_repository
        self.invitation_repository = invitation_repository
        self.workflow = workflow
        self.partner_registry = partner_registry
        self.ttl_days = ttl_days
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: InviteMemberCommand) -> InviteMemberResult:
        """
        Handle invite member command.

        A send failure is reported in the result; the invitation stays.

        Args:
            command: InviteMemberCommand

        Returns:
            InviteMemberResult

        Raises:
            InvalidRoleError: If the role is not admin or member
            InvalidEmailError: If the email is malformed
            ForbiddenError: If the inviter is not an owner or admin of the team
            TeamNotFoundError: If the team does not exist
            DomainMismatchError: If the email is outside the team domain
            AlreadyMemberError: If the email belongs to a team member
            DuplicateInvitationError: If a pending invitation exists
        """
        role = parse_assignable_role(command.role)
        email = Email.normalize(command.email)

        inviter_member = await self.member_repository.find_by_admin(command.inviter_id)
        TeamPolicy.ensure_can_invite(inviter_member, command.team_id)

        team = await self.team_repository.find_by_id(command.team_id)
        if team is None:
            raise TeamNotFoundError()

        if email.domain != team.domain:
            raise DomainMismatchError(f"Only {team.domain} email addresses can be invited")

        invitee = await self.admin_repository.find_by_email(email.value)
        if invitee is not None:
            membership = await self.member_repository.find_by_admin(invitee.id)
            if membership is not None and membership.team_id == team.id:
                raise AlreadyMemberError()

        now = datetime.now(timezone.utc)
        pending = await self.invitation_repository.find_pending(team.id, email.value)
        if pending is not None and pending.is_pending(now):
            raise DuplicateInvitationError()

        inviter = await self.admin_repository.find_by_id(command.inviter_id)
        if inviter is None:
            raise AdminNotFoundError()

        invitation = await self.invitation_repository.save(
            Invitation.create(
                team_id=team.id,
                email=email,
                role=role,
                invited_by=inviter.id,
                ttl_days=self.ttl_days,
                now=now,
            )
        )

        await self.event_bus.publish(
            MemberInvited(
                invitation_id=invitation.id,
                team_id=team.id,
                email=email.value,
                role=role.value,
                invited_by=inviter.id,
            )
        )

        result = await self.workflow.send_team_invitation(
            invitation,
            inviter.full_name,
            team.name,
            self.partner_registry.for_email(inviter.email),
        )
        if result.success and result.message_id:
            invitation = await self.invitation_repository.save(
                invitation.record_message(result.message_id)
            )

        return InviteMemberResult(invitation=invitation, notification=result)


class CancelInvitationHandler:
    """Handler for CancelInvitationCommand."""

    def __init__(
        self,
        member_repository: TeamMemberRepository,
        invitation_repository: InvitationRepository,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories."""
        self.member_repository = member_repository
        self.invitation_repository = invitation_repository
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: CancelInvitationCommand) -> Invitation:
        """
        Handle cancel invitation command.

        Args:
            command: CancelInvitationCommand

        Returns:
            Cancelled invitation

        Raises:
            ForbiddenError: If the actor is not an owner or admin of the team
            InvitationNotFoundError: If the invitation is not in the team
            InvalidInvitationStateError: If the invitation is not pending
        """
        actor = await self.member_repository.find_by_admin(command.actor_id)
        TeamPolicy.ensure_can_invite(actor, command.team_id)

        invitation = await self.invitation_repository.find_by_id(command.invitation_id)
        if invitation is None or invitation.team_id != command.team_id:
            raise InvitationNotFoundError()

        invitation = await self.invitation_repository.save(invitation.cancel())

        await self.event_bus.publish(
            InvitationCancelled(
                invitation_id=invitation.id,
                team_id=invitation.team_id,
                email=invitation.email.value,
                actor_id=command.actor_id,
            )
        )
        return invitation
