"""
Purchase handlers.

Handlers for starting a checkout and crediting a confirmed purchase.
"""

import logging
from typing import Optional

from admins.ports.admin_repository import AdminRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    AdminNotFoundError,
    InvalidQuantityError,
    MissingPaymentSessionError,
)
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import purchases_applied_total
from purchases.application.commands.complete_purchase import CompletePurchaseCommand
from purchases.application.commands.start_checkout import StartCheckoutCommand
from purchases.application.dto.purchase_dto import PurchaseResultDTO
from purchases.domain.events import PurchaseApplied
from purchases.ports.payment_gateway import PaymentGateway
from quotas.domain.ledger import QuotaLedger
from teams.application.services.scope_resolver import ScopeResolver

logger = logging.getLogger(__name__)


def parse_license_count(raw) -> int:
    """
    Parse a license count from user input.

    Raises:
        InvalidQuantityError: Unless the value is an integer of at least 1
    """
    if isinstance(raw, bool):
        raise InvalidQuantityError()
    try:
        count = int(str(raw).strip())
    except (TypeError, ValueError) as e:
        raise InvalidQuantityError() from e
    if count < 1:
        raise InvalidQuantityError()
    return count


class StartCheckoutHandler:
    """Handler for StartCheckoutCommand."""

    def __init__(self, admin_repository: AdminRepository, payment_gateway: PaymentGateway):
        """Initialize handler with repository and gateway."""
        self.admin_repository = admin_repository
        self.payment_gateway = payment_gateway

    async def handle(self, command: StartCheckoutCommand) -> str:
        """
        Handle start checkout command.

        Args:
            command: StartCheckoutCommand

        Returns:
            Checkout URL

        Raises:
            InvalidQuantityError: If the count is not a positive integer
            AdminNotFoundError: If the admin does not exist
            PaymentProviderError: If the provider call fails
        """
        count = parse_license_count(command.license_count)
        admin = await self.admin_repository.find_by_id(command.admin_id)
        if admin is None:
            raise AdminNotFoundError()
        url = await self.payment_gateway.create_checkout(admin.full_name, admin.email.value, count)
        logger.info("Checkout started", extra={"admin_id": str(admin.id), "license_count": count})
        return url


class CompletePurchaseHandler:
    """Handler for CompletePurchaseCommand."""

    def __init__(
        self,
        admin_repository: AdminRepository,
        scope_resolver: ScopeResolver,
        quota_ledger: QuotaLedger,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories and services."""
        self.admin_repository = admin_repository
        self.scope_resolver = scope_resolver
        self.quota_ledger = quota_ledger
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: CompletePurchaseCommand) -> PurchaseResultDTO:
        """
        Handle complete purchase command.

        The purchase is credited to the admin's current scope: its team, or
        the admin itself when solo.

        Args:
            command: CompletePurchaseCommand

        Returns:
            PurchaseResultDTO; ``replayed`` is True when the session had
            already been credited

        Raises:
            InvalidQuantityError: If the count is not a positive integer
            MissingPaymentSessionError: If no payment session id is given
            AdminNotFoundError: If the admin does not exist
        """
        count = parse_license_count(command.license_count)
        session_id = (command.session_id or "").strip()
        if not session_id:
            raise MissingPaymentSessionError()
        admin = await self.admin_repository.find_by_id(command.admin_id)
        if admin is None:
            raise AdminNotFoundError()

        scope = await self.scope_resolver.resolve(admin.id)
        outcome = await self.quota_ledger.apply_purchase(scope, count, session_id, admin.id)

        if outcome.replayed:
            logger.info("Purchase session replayed", extra={"session_id": session_id})
            purchases_applied_total.labels(scope_kind=scope.kind.value, replayed="true").inc()
        else:
            await self.event_bus.publish(
                PurchaseApplied(
                    scope=scope,
                    admin_id=admin.id,
                    session_id=session_id,
                    licenses_added=outcome.added,
                    total_licenses=outcome.total,
                )
            )

        return PurchaseResultDTO(
            licenses_added=outcome.added,
            total_licenses=outcome.total,
            session_id=session_id,
            replayed=outcome.replayed,
        )
