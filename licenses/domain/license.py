"""
License domain entity.

A license is a seat assigned to one email address inside an organization
scope. It starts pending and becomes active when the recipient completes the
activation flow.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import LicenseAlreadyActivatedError
from core.domain.value_objects import Email, Scope

STATUS_ACTIVE = "active"
STATUS_PENDING = "pending"


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    ``email`` is unique within ``scope`` and can only change while the
    license is pending. Business fields stay empty until activation.
    """

    id: uuid.UUID
    scope: Scope
    email: Email
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime
    business_name: str = ""
    business_type: str = ""
    is_activated: bool = False
    activated_at: Optional[datetime] = None
    message_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        scope: Scope,
        email: Email,
        created_by: uuid.UUID,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new pending License.

        Args:
            scope: Organization scope owning the license
            email: Normalized recipient email
            created_by: Admin UUID
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            scope=scope,
            email=email,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )

    @property
    def status(self) -> str:
        """Return ``active`` or ``pending``."""
        return STATUS_ACTIVE if self.is_activated else STATUS_PENDING

    def ensure_pending(self) -> None:
        """
        Raises:
            LicenseAlreadyActivatedError: If the license is activated
        """
        if self.is_activated:
            raise LicenseAlreadyActivatedError()

    def change_email(self, new_email: Email) -> "License":
        """
        Reassign a pending license to another address.

        Args:
            new_email: Normalized email

        Returns:
            Updated license

        Raises:
            LicenseAlreadyActivatedError: If the license is activated
        """
        self.ensure_pending()
        return replace(
            self,
            email=new_email,
            message_id=None,
            updated_at=datetime.now(timezone.utc),
        )

    def record_message(self, message_id: Optional[str]) -> "License":
        return replace(self, message_id=message_id, updated_at=datetime.now(timezone.utc))

    def activate(
        self, business_name: str, business_type: str, now: Optional[datetime] = None
    ) -> "License":
        """
        Move the license from pending to active.

        Args:
            business_name: Business name entered by the recipient
            business_type: Business type entered by the recipient
            now: Activation time (defaults to current UTC time)

        Returns:
            Activated license

        Raises:
            LicenseAlreadyActivatedError: If the license is already active
        """
        self.ensure_pending()
        now = now or datetime.now(timezone.utc)
        return replace(
            self,
            business_name=business_name.strip(),
            business_type=business_type.strip(),
            is_activated=True,
            activated_at=now,
            updated_at=now,
        )

    def move_to(self, scope: Scope) -> "License":
        return replace(self, scope=scope, updated_at=datetime.now(timezone.utc))
