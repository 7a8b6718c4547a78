"""
Unit tests for core value objects.
"""
import uuid

import pytest

from core.domain.exceptions import InvalidEmailError, ValidationError
from core.domain.value_objects import (
    Email,
    InvitationStatus,
    Scope,
    ScopeKind,
    SoloScope,
    TeamRole,
    TeamScope,
)


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        """Test valid email creation."""
        email = Email("test@example.com")
        assert str(email) == "test@example.com"
        assert email.value == "test@example.com"

    def test_invalid_email_no_at(self):
        """Test invalid email without @."""
        with pytest.raises(InvalidEmailError, match="Invalid email"):
            Email("invalid-email")

    def test_invalid_email_empty(self):
        """Test invalid empty email."""
        with pytest.raises(InvalidEmailError):
            Email("")

    def test_invalid_email_is_validation_error(self):
        with pytest.raises(ValidationError):
            Email.normalize("   ")

    def test_normalize_trims_and_lowercases(self):
        """Test normalized form used for uniqueness."""
        assert Email.normalize("  Bob@Acme.COM ") == Email("bob@acme.com")

    def test_normalize_rejects_non_string(self):
        with pytest.raises(InvalidEmailError):
            Email.normalize(None)

    def test_domain(self):
        assert Email("carol@sub.acme.com").domain == "sub.acme.com"

    def test_equal_emails_hash_equal(self):
        assert len({Email("a@b.com"), Email("a@b.com")}) == 1


class TestScope:
    """Tests for Scope value objects."""

    def test_team_scope(self):
        scope_id = uuid.uuid4()
        scope = TeamScope(scope_id)
        assert scope.kind is ScopeKind.TEAM
        assert scope.is_team is True
        assert str(scope) == f"team:{scope_id}"

    def test_solo_scope(self):
        scope = SoloScope(uuid.uuid4())
        assert scope.kind is ScopeKind.ADMIN
        assert scope.is_team is False

    def test_team_and_solo_scope_with_same_id_differ(self):
        """Test scopes compare by kind as well as id."""
        scope_id = uuid.uuid4()
        assert TeamScope(scope_id) != SoloScope(scope_id)

    def test_of_rebuilds_from_persisted_parts(self):
        scope_id = uuid.uuid4()
        assert Scope.of("team", str(scope_id)) == TeamScope(scope_id)
        assert Scope.of(ScopeKind.ADMIN, scope_id) == SoloScope(scope_id)

    def test_of_rejects_unknown_kind(self):
        with pytest.raises(ValueError):
            Scope.of("org", uuid.uuid4())


class TestTeamRole:
    """Tests for TeamRole enum."""

    def test_role_values(self):
        assert TeamRole.OWNER.value == "owner"
        assert TeamRole.ADMIN.value == "admin"
        assert TeamRole.MEMBER.value == "member"

    @pytest.mark.parametrize(
        "role,expected",
        [(TeamRole.OWNER, True), (TeamRole.ADMIN, True), (TeamRole.MEMBER, False)],
    )
    def test_can_invite(self, role, expected):
        assert role.can_invite is expected


class TestInvitationStatus:
    """Tests for InvitationStatus enum."""

    def test_status_values(self):
        assert [s.value for s in InvitationStatus] == [
            "pending",
            "accepted",
            "cancelled",
            "expired",
        ]
