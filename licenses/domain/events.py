"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from typing import Any, Dict

from core.domain.events import DomainEvent
from core.domain.value_objects import Scope


class LicenseCreated(DomainEvent):
    """Event raised when a license is assigned to an email."""

    def __init__(self, license_id: uuid.UUID, scope: Scope, email: str, created_by: uuid.UUID):
        """
        Initialize LicenseCreated event.

        Args:
            license_id: License UUID
            scope: Scope the license belongs to
            email: Recipient email
            created_by: Admin UUID
        """
        super().__init__(**self._base(license_id))
        self.license_id = license_id
        self.scope = scope
        self.email = email
        self.actor_id = created_by

    def data(self) -> Dict[str, Any]:
        return {"license_id": str(self.license_id), "scope": str(self.scope), "email": self.email}


class LicenseRemoved(DomainEvent):
    """Event raised when a license is deleted."""

    def __init__(self, license_id: uuid.UUID, scope: Scope, email: str, actor_id: uuid.UUID):
        super().__init__(**self._base(license_id))
        self.license_id = license_id
        self.scope = scope
        self.email = email
        self.actor_id = actor_id

    def data(self) -> Dict[str, Any]:
        return {"license_id": str(self.license_id), "scope": str(self.scope), "email": self.email}


class LicenseEmailChanged(DomainEvent):
    """Event raised when a pending license is moved to another address."""

    def __init__(
        self,
        license_id: uuid.UUID,
        scope: Scope,
        old_email: str,
        new_email: str,
        actor_id: uuid.UUID,
    ):
        super().__init__(**self._base(license_id))
        self.license_id = license_id
        self.scope = scope
        self.old_email = old_email
        self.new_email = new_email
        self.actor_id = actor_id

    def data(self) -> Dict[str, Any]:
        return {
            "license_id": str(self.license_id),
            "old_email": self.old_email,
            "new_email": self.new_email,
        }


class ActivationResent(DomainEvent):
    """Event raised when an activation email is sent again."""

    def __init__(self, license_id: uuid.UUID, scope: Scope, email: str, actor_id: uuid.UUID):
        super().__init__(**self._base(license_id))
        self.license_id = license_id
        self.scope = scope
        self.email = email
        self.actor_id = actor_id

    def data(self) -> Dict[str, Any]:
        return {"license_id": str(self.license_id), "email": self.email}
