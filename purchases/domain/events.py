"""
Purchase domain events.
"""

import uuid
from typing import Any, Dict

from core.domain.events import DomainEvent
from core.domain.value_objects import Scope


class PurchaseApplied(DomainEvent):
    """Event raised when purchased licenses are credited to a scope."""

    def __init__(
        self,
        scope: Scope,
        admin_id: uuid.UUID,
        session_id: str,
        licenses_added: int,
        total_licenses: int,
    ):
        """
        Initialize PurchaseApplied event.

        Args:
            scope: Scope credited
            admin_id: Admin who paid
            session_id: Payment session id
            licenses_added: Licenses bought
            total_licenses: Purchased count after the credit
        """
        super().__init__(**self._base(session_id))
        self.scope = scope
        self.actor_id = admin_id
        self.session_id = session_id
        self.licenses_added = licenses_added
        self.total_licenses = total_licenses

    def data(self) -> Dict[str, Any]:
        return {
            "scope": str(self.scope),
            "session_id": self.session_id,
            "licenses_added": self.licenses_added,
            "total_licenses": self.total_licenses,
        }
