"""
Integration tests for Team API endpoints.
"""

import pytest
from django.urls import reverse
from django.utils import timezone

from admins.infrastructure.models import Admin as AdminModel
from licenses.infrastructure.models import License as LicenseModel
from teams.infrastructure.models import Invitation as InvitationModel
from teams.infrastructure.models import TeamActivity
from teams.infrastructure.models import TeamMember as TeamMemberModel


@pytest.fixture
def team_id(admin_client):
    """Team created through the API by ``console_admin``."""
    response = admin_client.post(reverse("teams"), {}, format="json")
    assert response.status_code == 201
    return response.json()["team"]["id"]


@pytest.fixture
def teammate(team_id):
    """A member row for a second admin of the console admin's team."""
    admin = AdminModel.objects.create(email="mia@budaedc.com", first_name="Mia")
    return TeamMemberModel.objects.create(
        team_id=team_id, admin=admin, role="member", joined_at=timezone.now()
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestTeamAPI:
    """Integration tests for Team API."""

    def test_overview_without_team(self, admin_client):
        response = admin_client.get(reverse("teams"))

        assert response.status_code == 200
        assert response.json() == {
            "team": None,
            "role": None,
            "isOwner": False,
            "members": [],
            "invitations": [],
        }

    def test_create_team_moves_solo_licenses(self, admin_client, console_admin):
        admin_client.post(reverse("licenses"), {"email": "a@example.com"}, format="json")

        response = admin_client.post(reverse("teams"), {}, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["team"]["name"] == "Alice's Buda EDC Team"
        assert body["team"]["domain"] == "budaedc.com"
        assert body["team"]["purchasedLicenseCount"] == 3
        assert body["relocatedLicenses"] == 1
        assert LicenseModel.objects.get().scope_kind == "team"

        overview = admin_client.get(reverse("teams")).json()
        assert overview["isOwner"] is True
        assert overview["role"] == "owner"
        assert [m["email"] for m in overview["members"]] == ["alice@budaedc.com"]

    def test_create_second_team(self, admin_client, team_id):
        response = admin_client.post(reverse("teams"), {"name": "Again"}, format="json")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ALREADY_IN_TEAM"

    def test_rename(self, admin_client, team_id):
        response = admin_client.patch(
            reverse("team-detail", args=[team_id]), {"name": "Growth Team"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["team"]["name"] == "Growth Team"
        assert TeamActivity.objects.filter(team_id=team_id, action="team_renamed").exists()

    def test_rename_blank(self, admin_client, team_id):
        response = admin_client.patch(
            reverse("team-detail", args=[team_id]), {"name": "  "}, format="json"
        )

        assert response.status_code == 400

    def test_invite_and_cancel(self, admin_client, team_id, mailoutbox):
        response = admin_client.post(
            reverse("team-invitations", args=[team_id]),
            {"email": "Bob@BudaEDC.com", "role": "admin"},
            format="json",
        )

        assert response.status_code == 201
        invitation = response.json()["invitation"]
        assert invitation["email"] == "bob@budaedc.com"
        assert invitation["role"] == "admin"
        assert invitation["status"] == "pending"
        assert response.json()["emailSent"] is True
        assert mailoutbox[-1].to == ["bob@budaedc.com"]

        cancelled = admin_client.delete(
            reverse("team-invitation-detail", args=[team_id, invitation["id"]])
        )

        assert cancelled.status_code == 200
        assert cancelled.json()["invitation"]["status"] == "cancelled"
        assert InvitationModel.objects.get(id=invitation["id"]).status == "cancelled"

    def test_invite_duplicate_pending(self, admin_client, team_id):
        url = reverse("team-invitations", args=[team_id])
        admin_client.post(url, {"email": "bob@budaedc.com"}, format="json")

        response = admin_client.post(url, {"email": "bob@budaedc.com"}, format="json")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_INVITATION"

    def test_invite_other_domain(self, admin_client, team_id):
        response = admin_client.post(
            reverse("team-invitations", args=[team_id]), {"email": "bob@gmail.com"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "DOMAIN_MISMATCH"

    def test_update_member_role(self, admin_client, team_id, teammate):
        response = admin_client.patch(
            reverse("team-member-detail", args=[team_id, teammate.id]),
            {"role": "admin"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["member"]["role"] == "admin"
        teammate.refresh_from_db()
        assert teammate.role == "admin"

    def test_remove_member(self, admin_client, team_id, teammate):
        response = admin_client.delete(reverse("team-member-detail", args=[team_id, teammate.id]))

        assert response.status_code == 200
        assert not TeamMemberModel.objects.filter(id=teammate.id).exists()

    def test_remove_owner(self, admin_client, console_admin, team_id):
        owner = TeamMemberModel.objects.get(admin=console_admin)

        response = admin_client.delete(reverse("team-member-detail", args=[team_id, owner.id]))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CANNOT_REMOVE_OWNER"
