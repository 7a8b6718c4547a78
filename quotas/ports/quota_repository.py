"""
Quota repository port (interface).

This defines the contract for reading and crediting purchased license
counts. Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Optional

from core.domain.value_objects import Scope


class QuotaRepository(ABC):
    """Abstract repository for scope quotas."""

    @abstractmethod
    async def get_purchased_count(self, scope: Scope) -> int:
        """
        Get the purchased license count of the scope owner.

        Args:
            scope: Organization scope

        Returns:
            Purchased license count

        Raises:
            TeamNotFoundError: If a team scope has no team
            AdminNotFoundError: If a solo scope has no admin
        """
        pass

    @abstractmethod
    async def count_assigned(self, scope: Scope) -> int:
        """
        Count licenses assigned in the scope.

        Args:
            scope: Organization scope

        Returns:
            Number of licenses
        """
        pass

    @abstractmethod
    async def apply_purchase(
        self,
        scope: Scope,
        added_count: int,
        session_id: str,
        admin_id: Optional[uuid.UUID] = None,
    ):
        """
        Atomically add purchased licenses to the scope owner.

        Args:
            scope: Organization scope
            added_count: Licenses to add
            session_id: Payment session id, recorded once
            admin_id: Admin who paid

        Returns:
            PurchaseOutcome; ``replayed`` is True when the session was
            already applied and nothing changed
        """
        pass
