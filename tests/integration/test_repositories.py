"""
Integration tests for the Django repositories.

Repository coroutines are driven with ``async_to_sync`` so the ORM runs on the
test thread and sees the test transaction.
"""

import uuid
from datetime import timedelta
from io import StringIO

import pytest
from asgiref.sync import async_to_sync
from django.core.management import call_command
from django.utils import timezone

from admins.infrastructure.models import Admin as AdminModel
from admins.infrastructure.repositories.django_admin_repository import DjangoAdminRepository
from core.domain.exceptions import (
    AlreadyInTeamError,
    DuplicateLicenseError,
    QuotaExceededError,
    TeamNotFoundError,
)
from core.domain.value_objects import Email, InvitationStatus, SoloScope, TeamRole, TeamScope
from core.infrastructure.event_handlers import ActivityLogEventHandler
from licenses.domain.events import LicenseCreated
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from quotas.infrastructure.models import PurchaseReconciliation
from quotas.infrastructure.repositories.django_quota_repository import DjangoQuotaRepository
from teams.domain.invitation import Invitation
from teams.domain.member import TeamMember
from teams.domain.team import Team
from teams.infrastructure.models import Invitation as InvitationModel
from teams.infrastructure.models import Team as TeamModel
from teams.infrastructure.models import TeamActivity
from teams.infrastructure.repositories.django_invitation_repository import (
    DjangoInvitationRepository,
)
from teams.infrastructure.repositories.django_team_member_repository import (
    DjangoTeamMemberRepository,
)
from teams.infrastructure.repositories.django_team_repository import DjangoTeamRepository


@pytest.fixture
def db_admin(db):
    """Fixture for an Admin saved in database."""
    return AdminModel.objects.create(
        email="Alice@Acme.com", first_name="Alice", last_name="Anders", purchased_license_count=2
    )


@pytest.fixture
def db_team(db, db_admin):
    """Fixture for a Team saved in database with 2 purchased licenses."""
    team = Team.create("Acme", "acme.com", db_admin.id, purchased_license_count=2)
    return async_to_sync(DjangoTeamRepository().save)(team)


def _license(scope, email, created_by):
    return License.create(scope=scope, email=Email(email), created_by=created_by)


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminRepository:
    """Integration tests for DjangoAdminRepository."""

    def test_find_by_email_is_case_insensitive(self, db_admin):
        admin = async_to_sync(DjangoAdminRepository().find_by_email)(" ALICE@acme.com ")

        assert admin.id == db_admin.id
        assert admin.email == Email("alice@acme.com")
        assert admin.full_name == "Alice Anders"

    def test_find_missing(self):
        assert async_to_sync(DjangoAdminRepository().find_by_id)(uuid.uuid4()) is None


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseRepository:
    """Integration tests for DjangoLicenseRepository."""

    def test_add_and_find(self, db_admin):
        repo = DjangoLicenseRepository()
        scope = SoloScope(db_admin.id)

        saved = async_to_sync(repo.add)(_license(scope, "bob@x.com", db_admin.id), False)
        found = async_to_sync(repo.find_by_email)(scope, "bob@x.com")

        assert found.id == saved.id
        assert found.scope == scope
        assert async_to_sync(repo.find_by_id)(saved.id, TeamScope(db_admin.id)) is None

    def test_unique_email_per_scope(self, db_admin, db_team):
        repo = DjangoLicenseRepository()
        async_to_sync(repo.add)(_license(SoloScope(db_admin.id), "bob@x.com", db_admin.id), False)
        async_to_sync(repo.add)(_license(db_team.scope, "bob@x.com", db_admin.id), True)

        with pytest.raises(DuplicateLicenseError):
            async_to_sync(repo.add)(
                _license(SoloScope(db_admin.id), "bob@x.com", db_admin.id), False
            )

    def test_quota_enforced_insert(self, db_admin, db_team):
        """Test the insert is refused once assigned reaches purchased."""
        repo = DjangoLicenseRepository()
        for email in ("a@acme.com", "b@acme.com"):
            async_to_sync(repo.add)(_license(db_team.scope, email, db_admin.id), True)

        with pytest.raises(QuotaExceededError):
            async_to_sync(repo.add)(_license(db_team.scope, "c@acme.com", db_admin.id), True)
        assert async_to_sync(repo.count_by_scope)(db_team.scope) == 2

    def test_quota_enforced_insert_without_team(self, db_admin):
        repo = DjangoLicenseRepository()

        with pytest.raises(TeamNotFoundError):
            async_to_sync(repo.add)(_license(TeamScope(uuid.uuid4()), "a@acme.com", db_admin.id),
                                    True)

    def test_save_and_delete(self, db_admin):
        repo = DjangoLicenseRepository()
        scope = SoloScope(db_admin.id)
        license = async_to_sync(repo.add)(_license(scope, "bob@x.com", db_admin.id), False)

        async_to_sync(repo.save)(license.change_email(Email("carl@x.com")).record_message("m-1"))
        stored = async_to_sync(repo.find_by_id)(license.id, scope)

        assert stored.email == Email("carl@x.com")
        assert stored.message_id == "m-1"
        assert async_to_sync(repo.delete)(license.id, scope) is True
        assert async_to_sync(repo.delete)(license.id, scope) is False

    def test_list_newest_first_and_reassign(self, db_admin, db_team):
        repo = DjangoLicenseRepository()
        solo = SoloScope(db_admin.id)
        older = _license(solo, "a@x.com", db_admin.id)
        newer = _license(solo, "b@x.com", db_admin.id)
        object.__setattr__(older, "created_at", timezone.now() - timedelta(days=1))
        async_to_sync(repo.add)(older, False)
        async_to_sync(repo.add)(newer, False)

        listed = async_to_sync(repo.list_by_scope)(solo)
        moved = async_to_sync(repo.reassign_scope)(solo, db_team.scope)

        assert [lic.email.value for lic in listed] == ["b@x.com", "a@x.com"]
        assert moved == 2
        assert async_to_sync(repo.count_by_scope)(solo) == 0
        assert async_to_sync(repo.count_by_scope)(db_team.scope) == 2


@pytest.mark.django_db
@pytest.mark.integration
class TestQuotaRepository:
    """Integration tests for DjangoQuotaRepository."""

    def test_apply_purchase_once_per_session(self, db_admin, db_team):
        repo = DjangoQuotaRepository()

        first = async_to_sync(repo.apply_purchase)(db_team.scope, 3, "cs_1", db_admin.id)
        replay = async_to_sync(repo.apply_purchase)(db_team.scope, 3, "cs_1", db_admin.id)

        assert (first.total, first.replayed) == (5, False)
        assert (replay.total, replay.added, replay.replayed) == (5, 3, True)
        assert TeamModel.objects.get(id=db_team.id).purchased_license_count == 5
        assert PurchaseReconciliation.objects.filter(session_id="cs_1").count() == 1

    def test_solo_purchase(self, db_admin):
        repo = DjangoQuotaRepository()
        scope = SoloScope(db_admin.id)

        async_to_sync(repo.apply_purchase)(scope, 4, "cs_2", db_admin.id)

        assert async_to_sync(repo.get_purchased_count)(scope) == 6

    def test_missing_owner(self, db):
        with pytest.raises(TeamNotFoundError):
            async_to_sync(DjangoQuotaRepository().get_purchased_count)(TeamScope(uuid.uuid4()))


@pytest.mark.django_db
@pytest.mark.integration
class TestTeamRepositories:
    """Integration tests for team, member and invitation repositories."""

    def test_rename_keeps_purchased_count(self, db_team):
        repo = DjangoTeamRepository()
        TeamModel.objects.filter(id=db_team.id).update(purchased_license_count=9)

        renamed = async_to_sync(repo.save)(db_team.rename("Acme Growth"))

        assert renamed.name == "Acme Growth"
        assert renamed.purchased_license_count == 9

    def test_one_team_per_admin(self, db_admin, db_team):
        repo = DjangoTeamMemberRepository()
        async_to_sync(repo.add)(TeamMember.create(db_team.id, db_admin.id, TeamRole.OWNER))
        other = async_to_sync(DjangoTeamRepository().save)(
            Team.create("Other", "acme.com", db_admin.id)
        )

        with pytest.raises(AlreadyInTeamError):
            async_to_sync(repo.add)(TeamMember.create(other.id, db_admin.id, TeamRole.MEMBER))

    def test_members_owner_first_with_admin_details(self, db_admin, db_team):
        repo = DjangoTeamMemberRepository()
        mia = AdminModel.objects.create(email="mia@acme.com", first_name="Mia")
        async_to_sync(repo.add)(TeamMember.create(db_team.id, mia.id, TeamRole.MEMBER))
        async_to_sync(repo.add)(TeamMember.create(db_team.id, db_admin.id, TeamRole.OWNER))

        members = async_to_sync(repo.find_by_team)(db_team.id)

        assert [m.role for m in members] == [TeamRole.OWNER, TeamRole.MEMBER]
        assert members[0].email == "alice@acme.com"
        assert members[1].full_name == "Mia"

    def test_invitation_round_trip(self, db_admin, db_team):
        repo = DjangoInvitationRepository()
        invitation = async_to_sync(repo.save)(
            Invitation.create(db_team.id, Email("bob@acme.com"), TeamRole.ADMIN, db_admin.id)
        )

        pending = async_to_sync(repo.find_pending)(db_team.id, "bob@acme.com")
        async_to_sync(repo.save)(pending.cancel())

        assert pending.id == invitation.id
        assert pending.role is TeamRole.ADMIN
        assert async_to_sync(repo.find_pending)(db_team.id, "bob@acme.com") is None
        listed = async_to_sync(repo.list_by_team)(db_team.id, "cancelled")
        assert [i.id for i in listed] == [invitation.id]


@pytest.mark.django_db
@pytest.mark.integration
class TestExpireInvitationsCommand:
    """Integration tests for the expire_invitations command."""

    def _stale(self, db_admin, db_team):
        return async_to_sync(DjangoInvitationRepository().save)(
            Invitation.create(
                db_team.id,
                Email("old@acme.com"),
                TeamRole.MEMBER,
                db_admin.id,
                now=timezone.now() - timedelta(days=10),
            )
        )

    def test_marks_stale_invitations(self, db_admin, db_team):
        stale = self._stale(db_admin, db_team)
        out = StringIO()

        call_command("expire_invitations", stdout=out)

        assert InvitationModel.objects.get(id=stale.id).status == InvitationStatus.EXPIRED.value
        assert "Marked 1 invitation(s) as expired" in out.getvalue()

    def test_dry_run(self, db_admin, db_team):
        stale = self._stale(db_admin, db_team)

        call_command("expire_invitations", "--dry-run", stdout=StringIO())

        assert InvitationModel.objects.get(id=stale.id).status == "pending"


@pytest.mark.django_db
@pytest.mark.integration
class TestActivityLogEventHandler:
    """Integration tests for the team activity log."""

    def test_team_event_is_recorded(self, db_admin, db_team):
        event = LicenseCreated(uuid.uuid4(), db_team.scope, "a@acme.com", db_admin.id)

        async_to_sync(ActivityLogEventHandler().handle)(event)

        activity = TeamActivity.objects.get(team_id=db_team.id)
        assert activity.action == "license_created"
        assert activity.admin_id == db_admin.id
        assert activity.details["email"] == "a@acme.com"

    def test_solo_event_is_not_recorded(self, db_admin):
        event = LicenseCreated(uuid.uuid4(), SoloScope(db_admin.id), "a@x.com", db_admin.id)

        async_to_sync(ActivityLogEventHandler().handle)(event)

        assert TeamActivity.objects.count() == 0
