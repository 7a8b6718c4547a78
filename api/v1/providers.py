"""
Handler wiring for the v1 API.

Repositories are shared module instances; services that depend on settings
are built per call so overridden settings take effect.
"""

from django.conf import settings

from admins.infrastructure.repositories.django_admin_repository import DjangoAdminRepository
from licenses.application.handlers.create_license_handler import (
    CreateLicensesBatchHandler,
    ImportLicensesHandler,
)
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from notifications.application.workflow import InvitationWorkflow
from notifications.domain.brand import PartnerRegistry
from notifications.infrastructure.senders import build_email_sender
from purchases.application.handlers.purchase_handlers import (
    CompletePurchaseHandler,
    StartCheckoutHandler,
)
from purchases.infrastructure.payment_gateway import build_payment_gateway
from quotas.domain.ledger import QuotaLedger
from quotas.infrastructure.repositories.django_quota_repository import DjangoQuotaRepository
from teams.application.handlers.create_team_handler import CreateTeamHandler
from teams.application.handlers.invitation_handlers import (
    CancelInvitationHandler,
    InviteMemberHandler,
)
from teams.application.handlers.member_handlers import (
    RemoveMemberHandler,
    RenameTeamHandler,
    UpdateMemberRoleHandler,
)
from teams.application.handlers.team_query_handlers import GetTeamOverviewHandler
from teams.application.services.scope_resolver import ScopeResolver
from teams.infrastructure.repositories.django_invitation_repository import (
    DjangoInvitationRepository,
)
from teams.infrastructure.repositories.django_team_member_repository import (
    DjangoTeamMemberRepository,
)
from teams.infrastructure.repositories.django_team_repository import DjangoTeamRepository

# Initialize repositories (in production, use DI container)
admin_repo = DjangoAdminRepository()
license_repo = DjangoLicenseRepository()
quota_repo = DjangoQuotaRepository()
team_repo = DjangoTeamRepository()
member_repo = DjangoTeamMemberRepository()
invitation_repo = DjangoInvitationRepository()


def scope_resolver() -> ScopeResolver:
    return ScopeResolver(member_repo)


def quota_ledger() -> QuotaLedger:
    return QuotaLedger(quota_repo, enforce_solo_quota=settings.ENFORCE_SOLO_ADMIN_QUOTA)


def workflow() -> InvitationWorkflow:
    return InvitationWorkflow(
        email_sender=build_email_sender(),
        app_base_url=settings.APP_BASE_URL,
        invitation_ttl_days=settings.INVITATION_TTL_DAYS,
    )


def partner_registry() -> PartnerRegistry:
    return PartnerRegistry.from_settings(settings.PARTNER_BRANDS, settings.DEFAULT_PARTNER_BRAND)


def license_handler(handler_class):
    """
    Build a license handler.

    Args:
        handler_class: Subclass of LicenseHandlerBase

    Returns:
        Handler wired to the Django repositories
    """
    return handler_class(
        license_repository=license_repo,
        admin_repository=admin_repo,
        scope_resolver=scope_resolver(),
        quota_ledger=quota_ledger(),
        workflow=workflow(),
        partner_registry=partner_registry(),
    )


def import_handler() -> ImportLicensesHandler:
    return ImportLicensesHandler(license_handler(CreateLicensesBatchHandler))


def create_team_handler() -> CreateTeamHandler:
    return CreateTeamHandler(
        admin_repository=admin_repo,
        team_repository=team_repo,
        member_repository=member_repo,
        license_repository=license_repo,
        allowed_domains=settings.TEAM_ALLOWED_DOMAINS,
        domain_labels=settings.TEAM_DOMAIN_LABELS,
    )


def invite_member_handler() -> InviteMemberHandler:
    return InviteMemberHandler(
        admin_repository=admin_repo,
        team_repository=team_repo,
        member_repository=member_repo,
        invitation_repository=invitation_repo,
        workflow=workflow(),
        partner_registry=partner_registry(),
        ttl_days=settings.INVITATION_TTL_DAYS,
    )


def cancel_invitation_handler() -> CancelInvitationHandler:
    return CancelInvitationHandler(member_repo, invitation_repo)


def update_member_role_handler() -> UpdateMemberRoleHandler:
    return UpdateMemberRoleHandler(member_repo)


def remove_member_handler() -> RemoveMemberHandler:
    return RemoveMemberHandler(member_repo)


def rename_team_handler() -> RenameTeamHandler:
    return RenameTeamHandler(team_repo, member_repo)


def team_overview_handler() -> GetTeamOverviewHandler:
    return GetTeamOverviewHandler(team_repo, member_repo, invitation_repo)


def start_checkout_handler() -> StartCheckoutHandler:
    return StartCheckoutHandler(admin_repo, build_payment_gateway())


def complete_purchase_handler() -> CompletePurchaseHandler:
    return CompletePurchaseHandler(admin_repo, scope_resolver(), quota_ledger())
