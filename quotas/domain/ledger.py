"""
Quota ledger domain service.

A scope's quota is the purchased license count stored on its owner (team or
admin) minus the licenses currently assigned in the scope.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.exceptions import InvalidQuantityError, QuotaExceededError
from core.domain.value_objects import Scope, ScopeKind
from quotas.ports.quota_repository import QuotaRepository


@dataclass(frozen=True)
class Availability:
    """
    Remaining license capacity of a scope.

    ``purchased`` is always the stored count. An unlimited scope has no
    ``remaining`` capacity figure.
    """

    purchased: int
    assigned: int
    is_unlimited: bool = False

    @classmethod
    def unlimited(cls, purchased: int, assigned: int) -> "Availability":
        return cls(purchased=purchased, assigned=assigned, is_unlimited=True)

    @classmethod
    def bounded(cls, purchased: int, assigned: int) -> "Availability":
        return cls(purchased=purchased, assigned=assigned)

    @property
    def remaining(self) -> Optional[int]:
        """Purchased minus assigned, or None when unlimited."""
        if self.is_unlimited:
            return None
        return self.purchased - self.assigned

    def allows(self, requested: int) -> bool:
        return self.is_unlimited or requested <= self.remaining


@dataclass(frozen=True)
class PurchaseOutcome:
    """Result of crediting a purchase to a scope."""

    total: int
    added: int
    replayed: bool = False


class QuotaLedger:
    """
    Quota ledger for team and solo scopes.

    Team scopes are always bounded. Solo scopes are unlimited unless
    ``enforce_solo_quota`` is set.
    """

    def __init__(self, quota_repository: QuotaRepository, enforce_solo_quota: bool = False):
        """Initialize ledger with its repository."""
        self.quota_repository = quota_repository
        self.enforce_solo_quota = enforce_solo_quota

    def is_bounded(self, scope: Scope) -> bool:
        """
        Check whether license creation in a scope is limited by quota.

        Args:
            scope: Organization scope

        Returns:
            True for team scopes, and for solo scopes when enforcement is on
        """
        if scope.kind is ScopeKind.TEAM:
            return True
        if scope.kind is ScopeKind.ADMIN:
            return self.enforce_solo_quota
        raise ValueError(f"Unknown scope kind: {scope.kind}")

    async def available_licenses(self, scope: Scope) -> Availability:
        """
        Compute the availability of a scope.

        Args:
            scope: Organization scope

        Returns:
            Availability (bounded or unlimited)
        """
        assigned = await self.quota_repository.count_assigned(scope)
        purchased = await self.quota_repository.get_purchased_count(scope)
        if not self.is_bounded(scope):
            return Availability.unlimited(purchased, assigned)
        return Availability.bounded(purchased, assigned)

    async def admit(self, scope: Scope, requested_count: int) -> Availability:
        """
        Ensure a scope can take ``requested_count`` more licenses.

        Args:
            scope: Organization scope
            requested_count: Number of licenses about to be created

        Returns:
            Availability the decision was made on

        Raises:
            QuotaExceededError: If the scope is bounded and short of capacity
        """
        availability = await self.available_licenses(scope)
        if not availability.allows(requested_count):
            raise QuotaExceededError(
                available=max(availability.remaining, 0), requested=requested_count
            )
        return availability

    async def apply_purchase(
        self, scope: Scope, added_count: int, session_id: str, admin_id=None
    ) -> PurchaseOutcome:
        """
        Credit purchased licenses to a scope.

        Args:
            scope: Scope receiving the licenses
            added_count: Number of licenses bought
            session_id: Payment session; a repeated id is not credited twice
            admin_id: Admin who completed the purchase

        Returns:
            PurchaseOutcome with the new total

        Raises:
            InvalidQuantityError: If added_count is not a positive integer
        """
        if isinstance(added_count, bool) or not isinstance(added_count, int) or added_count < 1:
            raise InvalidQuantityError()
        if not session_id:
            raise ValueError("session_id is required")
        return await self.quota_repository.apply_purchase(
            scope, added_count, session_id, admin_id
        )
