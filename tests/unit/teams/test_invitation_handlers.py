"""
Unit tests for the invitation entity and invitation handlers.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from admins.domain.admin import Admin
from core.domain.exceptions import (
    AlreadyMemberError,
    DomainMismatchError,
    DuplicateInvitationError,
    ForbiddenError,
    InvalidInvitationStateError,
    InvalidRoleError,
    InvitationNotFoundError,
)
from core.domain.value_objects import Email, InvitationStatus, TeamRole
from fakes import FakeEmailSender
from notifications.application.workflow import InvitationWorkflow
from teams.application.commands.cancel_invitation import CancelInvitationCommand
from teams.application.commands.invite_member import InviteMemberCommand
from teams.application.handlers.invitation_handlers import (
    CancelInvitationHandler,
    InviteMemberHandler,
)
from teams.domain.invitation import Invitation
from teams.domain.member import TeamMember
from teams.domain.team import Team

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def acme_team(team_repository, member_repository, admin_repository, team_admin):
    """Team with ``team_admin`` as owner and Mia as plain member."""
    team = await team_repository.save(Team.create("Acme", "acme.com", team_admin.id))
    await member_repository.add(TeamMember.create(team.id, team_admin.id, TeamRole.OWNER))
    mia = admin_repository.put(Admin.create("mia@acme.com", first_name="Mia"))
    await member_repository.add(TeamMember.create(team.id, mia.id, TeamRole.MEMBER))
    return team


@pytest.fixture
def invite_handler_factory(
    admin_repository,
    team_repository,
    member_repository,
    invitation_repository,
    workflow,
    partner_registry,
    event_bus,
):
    def build(**overrides):
        kwargs = {
            "admin_repository": admin_repository,
            "team_repository": team_repository,
            "member_repository": member_repository,
            "invitation_repository": invitation_repository,
            "workflow": workflow,
            "partner_registry": partner_registry,
            "ttl_days": 7,
            "event_bus": event_bus,
        }
        kwargs.update(overrides)
        return InviteMemberHandler(**kwargs)

    return build


class TestInvitationEntity:
    """Tests for the Invitation state machine."""

    def _invitation(self):
        return Invitation.create(
            uuid.uuid4(), Email("bob@acme.com"), TeamRole.MEMBER, uuid.uuid4(), now=NOW
        )

    def test_create_sets_expiry(self):
        invitation = self._invitation()

        assert invitation.status is InvitationStatus.PENDING
        assert invitation.expires_at == NOW + timedelta(days=7)

    def test_expired_after_ttl(self):
        invitation = self._invitation()
        later = NOW + timedelta(days=7, seconds=1)

        assert invitation.effective_status(later) is InvitationStatus.EXPIRED
        assert invitation.with_expiry_applied(later).status is InvitationStatus.EXPIRED
        assert invitation.with_expiry_applied(NOW) is invitation

    def test_cancel_pending(self):
        assert self._invitation().cancel(NOW).status is InvitationStatus.CANCELLED

    def test_accept_pending(self):
        assert self._invitation().accept(NOW).status is InvitationStatus.ACCEPTED

    @pytest.mark.parametrize("transition", ["cancel", "accept"])
    def test_no_transition_out_of_cancelled(self, transition):
        cancelled = self._invitation().cancel(NOW)

        with pytest.raises(InvalidInvitationStateError):
            getattr(cancelled, transition)(NOW)

    def test_cannot_cancel_expired(self):
        with pytest.raises(InvalidInvitationStateError, match="expired"):
            self._invitation().cancel(NOW + timedelta(days=8))


@pytest.mark.asyncio
class TestInviteMemberHandler:
    """Tests for InviteMemberHandler."""

    async def test_owner_invites_member(
        self, invite_handler_factory, team_admin, acme_team, email_sender, event_bus
    ):
        """Test a valid invitation is stored and emailed."""
        result = await invite_handler_factory().handle(
            InviteMemberCommand(
                inviter_id=team_admin.id, team_id=acme_team.id, email="Bob@Acme.com", role="admin"
            )
        )

        invitation = result.invitation
        assert invitation.email == Email("bob@acme.com")
        assert invitation.role is TeamRole.ADMIN
        assert invitation.status is InvitationStatus.PENDING
        assert invitation.message_id == "msg-1"
        assert result.email_sent is True
        sent = email_sender.sent[0]
        assert sent["template"] == "team_invitation"
        assert sent["data"]["team_name"] == "Acme"
        assert sent["data"]["role_display"] == "an Admin"
        assert str(invitation.id) in sent["data"]["invite_url"]
        assert event_bus.types() == ["MemberInvited"]

    async def test_domain_mismatch_creates_nothing(
        self, invite_handler_factory, team_admin, acme_team, invitation_repository
    ):
        with pytest.raises(DomainMismatchError):
            await invite_handler_factory().handle(
                InviteMemberCommand(
                    inviter_id=team_admin.id, team_id=acme_team.id, email="bob@other.com"
                )
            )
        assert invitation_repository.invitations == {}

    async def test_plain_member_cannot_invite(
        self, invite_handler_factory, admin_repository, acme_team
    ):
        mia = await admin_repository.find_by_email("mia@acme.com")

        with pytest.raises(ForbiddenError):
            await invite_handler_factory().handle(
                InviteMemberCommand(inviter_id=mia.id, team_id=acme_team.id, email="bob@acme.com")
            )

    async def test_inviter_of_another_team_is_forbidden(
        self, invite_handler_factory, team_admin, acme_team
    ):
        with pytest.raises(ForbiddenError):
            await invite_handler_factory().handle(
                InviteMemberCommand(inviter_id=team_admin.id, team_id=uuid.uuid4(),
                                    email="bob@acme.com")
            )

    async def test_owner_role_cannot_be_invited(self, invite_handler_factory, team_admin, acme_team):
        with pytest.raises(InvalidRoleError):
            await invite_handler_factory().handle(
                InviteMemberCommand(
                    inviter_id=team_admin.id, team_id=acme_team.id, email="bob@acme.com",
                    role="owner",
                )
            )

    async def test_existing_member(self, invite_handler_factory, team_admin, acme_team):
        with pytest.raises(AlreadyMemberError):
            await invite_handler_factory().handle(
                InviteMemberCommand(inviter_id=team_admin.id, team_id=acme_team.id,
                                    email="mia@acme.com")
            )

    async def test_pending_invitation_blocks_second(
        self, invite_handler_factory, team_admin, acme_team
    ):
        handler = invite_handler_factory()
        command = InviteMemberCommand(
            inviter_id=team_admin.id, team_id=acme_team.id, email="bob@acme.com"
        )
        await handler.handle(command)

        with pytest.raises(DuplicateInvitationError):
            await handler.handle(command)

    async def test_expired_invitation_can_be_reissued(
        self, invite_handler_factory, team_admin, acme_team, invitation_repository
    ):
        await invitation_repository.save(
            Invitation.create(
                acme_team.id,
                Email("bob@acme.com"),
                TeamRole.MEMBER,
                team_admin.id,
                now=datetime.now(timezone.utc) - timedelta(days=10),
            )
        )

        result = await invite_handler_factory().handle(
            InviteMemberCommand(inviter_id=team_admin.id, team_id=acme_team.id,
                                email="bob@acme.com")
        )

        assert result.invitation.is_pending()

    async def test_failed_send_keeps_invitation(
        self, invite_handler_factory, team_admin, acme_team, invitation_repository
    ):
        workflow = InvitationWorkflow(FakeEmailSender(fail=True), "https://app.example.com")

        result = await invite_handler_factory(workflow=workflow).handle(
            InviteMemberCommand(inviter_id=team_admin.id, team_id=acme_team.id,
                                email="bob@acme.com")
        )

        assert result.email_sent is False
        assert result.invitation.message_id is None
        assert list(invitation_repository.invitations) == [result.invitation.id]


@pytest.mark.asyncio
class TestCancelInvitationHandler:
    """Tests for CancelInvitationHandler."""

    async def test_cancel(self, member_repository, invitation_repository, team_admin, acme_team,
                          event_bus):
        invitation = await invitation_repository.save(
            Invitation.create(acme_team.id, Email("bob@acme.com"), TeamRole.MEMBER, team_admin.id)
        )

        cancelled = await CancelInvitationHandler(
            member_repository, invitation_repository, event_bus
        ).handle(
            CancelInvitationCommand(
                actor_id=team_admin.id, team_id=acme_team.id, invitation_id=invitation.id
            )
        )

        assert cancelled.status is InvitationStatus.CANCELLED
        stored = await invitation_repository.find_by_id(invitation.id)
        assert stored.status is InvitationStatus.CANCELLED
        assert event_bus.types() == ["InvitationCancelled"]

    async def test_cancel_twice(self, member_repository, invitation_repository, team_admin,
                                acme_team, event_bus):
        invitation = await invitation_repository.save(
            Invitation.create(acme_team.id, Email("bob@acme.com"), TeamRole.MEMBER, team_admin.id)
        )
        handler = CancelInvitationHandler(member_repository, invitation_repository, event_bus)
        command = CancelInvitationCommand(
            actor_id=team_admin.id, team_id=acme_team.id, invitation_id=invitation.id
        )
        await handler.handle(command)

        with pytest.raises(InvalidInvitationStateError):
            await handler.handle(command)

    async def test_invitation_of_another_team(
        self, member_repository, invitation_repository, team_admin, acme_team, event_bus
    ):
        invitation = await invitation_repository.save(
            Invitation.create(uuid.uuid4(), Email("bob@acme.com"), TeamRole.MEMBER, team_admin.id)
        )

        with pytest.raises(InvitationNotFoundError):
            await CancelInvitationHandler(
                member_repository, invitation_repository, event_bus
            ).handle(
                CancelInvitationCommand(
                    actor_id=team_admin.id, team_id=acme_team.id, invitation_id=invitation.id
                )
            )
