"""
Django implementation of AdminRepository port.
"""

import uuid
from typing import Optional

from asgiref.sync import sync_to_async

from admins.domain.admin import Admin
from admins.infrastructure.models import Admin as AdminModel
from admins.ports.admin_repository import AdminRepository
from core.domain.value_objects import Email


class DjangoAdminRepository(AdminRepository):
    """Django ORM implementation of AdminRepository."""

    @staticmethod
    def to_domain(model: AdminModel) -> Admin:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Admin model

        Returns:
            Admin domain entity
        """
        return Admin(
            id=model.id,
            email=Email(model.email),
            first_name=model.first_name,
            last_name=model.last_name,
            role=model.role,
            purchased_license_count=model.purchased_license_count,
            active_purchased_license_count=model.active_purchased_license_count,
            created_at=model.created_at,
        )

    @sync_to_async
    def find_by_id(self, admin_id: uuid.UUID) -> Optional[Admin]:
        try:
            return self.to_domain(AdminModel.objects.get(id=admin_id))
        except AdminModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_email(self, email: str) -> Optional[Admin]:
        model = AdminModel.objects.filter(email=email.strip().lower()).first()
        return self.to_domain(model) if model else None
