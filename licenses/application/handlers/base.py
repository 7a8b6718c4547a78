"""
Shared plumbing for license handlers.

Every license operation runs in the scope of the requesting admin: its team
when it has one, otherwise the admin itself.
"""

import logging
import uuid
from typing import Optional, Tuple

from admins.domain.admin import Admin
from admins.ports.admin_repository import AdminRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    AdminNotFoundError,
    DuplicateLicenseError,
    LicenseNotFoundError,
    PersistenceError,
    QuotaExceededError,
)
from core.domain.value_objects import Email, Scope
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import quota_rejections_total
from licenses.domain.events import LicenseCreated
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository
from notifications.application.workflow import InvitationWorkflow
from notifications.domain.brand import PartnerRegistry
from notifications.ports.email_sender import SendResult
from quotas.domain.ledger import Availability, QuotaLedger
from teams.application.services.scope_resolver import ScopeResolver

logger = logging.getLogger(__name__)


class LicenseHandlerBase:
    """Base class for license command and query handlers."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        admin_repository: AdminRepository,
        scope_resolver: ScopeResolver,
        quota_ledger: Optional[QuotaLedger] = None,
        workflow: Optional[InvitationWorkflow] = None,
        partner_registry: Optional[PartnerRegistry] = None,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories and services."""
        self.license_repository = license_repository
        self.admin_repository = admin_repository
        self.scope_resolver = scope_resolver
        self.quota_ledger = quota_ledger
        self.workflow = workflow
        self.partner_registry = partner_registry
        self.event_bus = event_bus or default_event_bus

    async def _context(self, admin_id: uuid.UUID) -> Tuple[Admin, Scope]:
        """
        Load the requesting admin and its scope.

        Raises:
            AdminNotFoundError: If the admin does not exist
        """
        admin = await self.admin_repository.find_by_id(admin_id)
        if admin is None:
            raise AdminNotFoundError(f"Admin {admin_id} not found")
        return admin, await self.scope_resolver.resolve(admin.id)

    async def _get_license(self, license_id: uuid.UUID, scope: Scope) -> License:
        license = await self.license_repository.find_by_id(license_id, scope)
        if license is None:
            raise LicenseNotFoundError(f"License {license_id} not found")
        return license

    async def _admit(self, scope: Scope, requested: int) -> Availability:
        try:
            return await self.quota_ledger.admit(scope, requested)
        except QuotaExceededError:
            quota_rejections_total.labels(scope_kind=scope.kind.value).inc()
            raise

    async def _insert(self, admin: Admin, scope: Scope, email: Email) -> License:
        """
        Insert a pending license for a normalized email.

        Raises:
            DuplicateLicenseError: If the email already has a license in scope
            QuotaExceededError: If a concurrent insert filled the scope
            PersistenceError: If the store rejects the write
        """
        if await self.license_repository.find_by_email(scope, email.value):
            raise DuplicateLicenseError(f"License already exists for: {email}")

        license = await self.license_repository.add(
            License.create(scope=scope, email=email, created_by=admin.id),
            enforce_quota=self.quota_ledger.is_bounded(scope),
        )
        await self.event_bus.publish(
            LicenseCreated(
                license_id=license.id,
                scope=scope,
                email=license.email.value,
                created_by=admin.id,
            )
        )
        return license

    async def _send_activation(self, license: License, admin: Admin) -> Tuple[License, SendResult]:
        """
        Send the activation email and store its message id.

        A failed send leaves the license as it is.
        """
        brand = self.partner_registry.for_email(admin.email)
        result = await self.workflow.send_license_activation(license, admin.full_name, brand)
        if result.success and result.message_id:
            try:
                license = await self.license_repository.save(license.record_message(result.message_id))
            except PersistenceError as e:
                logger.warning(
                    "Could not store message id for license %s: %s", license.id, e.message
                )
        return license, result
