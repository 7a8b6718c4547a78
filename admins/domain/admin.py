"""
Admin domain entity.

An admin is the identity that provisions licenses. Without a team it is its
own organization scope.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email, SoloScope

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Admin:
    """
    Admin domain entity.

    ``role`` is the claim issued by the identity provider; only ``admin``
    may use the console.
    """

    id: uuid.UUID
    email: Email
    first_name: str
    last_name: str
    role: str
    purchased_license_count: int
    active_purchased_license_count: int
    created_at: datetime

    def __post_init__(self):
        """Validate admin entity."""
        if self.purchased_license_count < 0:
            raise ValueError("Purchased license count cannot be negative")

    @classmethod
    def create(
        cls,
        email: str,
        first_name: str = "",
        last_name: str = "",
        role: str = ADMIN_ROLE,
        purchased_license_count: int = 0,
        admin_id: Optional[uuid.UUID] = None,
    ) -> "Admin":
        """
        Create a new Admin entity.

        Args:
            email: Login email
            first_name: Given name
            last_name: Family name
            role: Role claim
            purchased_license_count: Licenses bought while solo
            admin_id: Optional UUID (generated if not provided)

        Returns:
            Admin entity instance
        """
        return cls(
            id=admin_id or uuid.uuid4(),
            email=Email.normalize(email),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            role=role,
            purchased_license_count=purchased_license_count,
            active_purchased_license_count=0,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @property
    def full_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or str(self.email)

    @property
    def solo_scope(self) -> SoloScope:
        return SoloScope(self.id)
