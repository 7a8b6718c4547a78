"""
Pytest configuration and shared fixtures.
"""

import pytest

from admins.domain.admin import Admin
from fakes import (
    FakeEmailSender,
    FakePaymentGateway,
    InMemoryAdminRepository,
    InMemoryInvitationRepository,
    InMemoryLicenseRepository,
    InMemoryQuotaRepository,
    InMemoryTeamMemberRepository,
    InMemoryTeamRepository,
    RecordingEventBus,
)
from notifications.application.workflow import InvitationWorkflow
from notifications.domain.brand import PartnerRegistry
from quotas.domain.ledger import QuotaLedger
from teams.application.services.scope_resolver import ScopeResolver

APP_BASE_URL = "https://app.example.com"

PARTNER_BRANDS = {
    "buda-hive": {
        "ref": "budaHive",
        "program_name": "Buda Hive",
        "support_email": "support@budaedc.com",
        "job_posts": 3,
        "domains": ["budaedc.com"],
    },
    "acme-labs": {
        "program_name": "Acme Labs",
        "support_email": "help@acme.com",
        "domains": ["acme.com"],
    },
}


@pytest.fixture
def admin_repository():
    """Fixture for an in-memory AdminRepository."""
    return InMemoryAdminRepository()


@pytest.fixture
def team_repository():
    """Fixture for an in-memory TeamRepository."""
    return InMemoryTeamRepository()


@pytest.fixture
def member_repository(admin_repository):
    """Fixture for an in-memory TeamMemberRepository."""
    return InMemoryTeamMemberRepository(admin_repository)


@pytest.fixture
def invitation_repository():
    """Fixture for an in-memory InvitationRepository."""
    return InMemoryInvitationRepository()


@pytest.fixture
def license_repository():
    """Fixture for an in-memory LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def quota_repository(license_repository, admin_repository, team_repository):
    """Fixture for an in-memory QuotaRepository linked to the license store."""
    return InMemoryQuotaRepository(license_repository, admin_repository, team_repository)


@pytest.fixture
def quota_ledger(quota_repository):
    return QuotaLedger(quota_repository)


@pytest.fixture
def scope_resolver(member_repository):
    return ScopeResolver(member_repository)


@pytest.fixture
def email_sender():
    return FakeEmailSender()


@pytest.fixture
def workflow(email_sender):
    return InvitationWorkflow(email_sender, APP_BASE_URL, invitation_ttl_days=7)


@pytest.fixture
def partner_registry():
    return PartnerRegistry.from_settings(PARTNER_BRANDS, "buda-hive")


@pytest.fixture
def event_bus():
    """Fixture for an event bus that records published events."""
    return RecordingEventBus()


@pytest.fixture
def payment_gateway():
    return FakePaymentGateway()


@pytest.fixture
def license_handler_factory(
    license_repository,
    admin_repository,
    scope_resolver,
    quota_ledger,
    workflow,
    partner_registry,
    event_bus,
):
    """Build any license handler wired to the in-memory fixtures."""

    def build(handler_class, **overrides):
        kwargs = {
            "license_repository": license_repository,
            "admin_repository": admin_repository,
            "scope_resolver": scope_resolver,
            "quota_ledger": quota_ledger,
            "workflow": workflow,
            "partner_registry": partner_registry,
            "event_bus": event_bus,
        }
        kwargs.update(overrides)
        return handler_class(**kwargs)

    return build


@pytest.fixture
def solo_admin(admin_repository):
    """A solo admin outside any team domain."""
    return admin_repository.put(
        Admin.create(email="owner@example.com", first_name="Olga", last_name="Owner")
    )


@pytest.fixture
def team_admin(admin_repository):
    """An admin in an allow-listed team domain."""
    return admin_repository.put(
        Admin.create(
            email="alice@acme.com",
            first_name="Alice",
            last_name="Anders",
            purchased_license_count=5,
        )
    )


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def console_admin(db):
    """Fixture for a logged-in capable user with an admin profile saved in database."""
    from django.contrib.auth import get_user_model

    from admins.infrastructure.models import Admin as AdminModel

    user = get_user_model().objects.create_user(
        username="alice@budaedc.com", email="alice@budaedc.com", password="secret-pass"
    )
    return AdminModel.objects.create(
        user=user,
        email="alice@budaedc.com",
        first_name="Alice",
        last_name="Anders",
        purchased_license_count=3,
    )


@pytest.fixture
def admin_client(api_client, console_admin):
    """API client logged in as ``console_admin``."""
    api_client.force_login(console_admin.user)
    return api_client
