"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import logging
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, transaction

from core.domain.exceptions import DuplicateLicenseError, PersistenceError, QuotaExceededError
from core.domain.value_objects import Email, Scope
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository
from quotas.infrastructure.owners import purchased_count

logger = logging.getLogger(__name__)


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Locks the quota owner row around quota-bounded inserts
    3. Turns unique constraint violations into DuplicateLicenseError
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            scope=Scope.of(model.scope_kind, model.scope_id),
            email=Email(model.email),
            created_by=model.created_by_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
            business_name=model.business_name,
            business_type=model.business_type,
            is_activated=model.is_activated,
            activated_at=model.activated_at,
            message_id=model.message_id,
        )

    def _scoped(self, scope: Scope):
        return LicenseModel.objects.filter(scope_kind=scope.kind.value, scope_id=scope.id)

    @sync_to_async
    def add(self, license: License, enforce_quota: bool) -> License:
        scope = license.scope
        try:
            with transaction.atomic():
                if enforce_quota:
                    purchased = purchased_count(scope, lock=True)
                    assigned = self._scoped(scope).count()
                    if assigned >= purchased:
                        raise QuotaExceededError(available=max(purchased - assigned, 0))
                model = LicenseModel.objects.create(
                    id=license.id,
                    scope_kind=scope.kind.value,
                    scope_id=scope.id,
                    email=license.email.value,
                    business_name=license.business_name,
                    business_type=license.business_type,
                    is_activated=license.is_activated,
                    created_by_id=license.created_by,
                    message_id=license.message_id,
                    created_at=license.created_at,
                    updated_at=license.updated_at,
                    activated_at=license.activated_at,
                )
        except IntegrityError as e:
            raise DuplicateLicenseError(
                f"A license for {license.email} already exists"
            ) from e
        except DatabaseError as e:
            logger.error("License insert failed: %s", e, exc_info=True)
            raise PersistenceError("Failed to create license") from e
        return self._to_domain(model)

    @sync_to_async
    def save(self, license: License) -> License:
        try:
            with transaction.atomic():
                updated = self._scoped(license.scope).filter(id=license.id).update(
                    email=license.email.value,
                    business_name=license.business_name,
                    business_type=license.business_type,
                    is_activated=license.is_activated,
                    activated_at=license.activated_at,
                    message_id=license.message_id,
                    updated_at=license.updated_at,
                )
        except IntegrityError as e:
            raise DuplicateLicenseError(
                f"A license for {license.email} already exists"
            ) from e
        if not updated:
            raise PersistenceError("License no longer exists")
        return license

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID, scope: Scope) -> Optional[License]:
        model = self._scoped(scope).filter(id=license_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_email(self, scope: Scope, email: str) -> Optional[License]:
        model = self._scoped(scope).filter(email=email).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_by_scope(self, scope: Scope) -> List[License]:
        return [
            self._to_domain(model)
            for model in self._scoped(scope).order_by("-created_at", "id")
        ]

    @sync_to_async
    def count_by_scope(self, scope: Scope) -> int:
        return self._scoped(scope).count()

    @sync_to_async
    def delete(self, license_id: uuid.UUID, scope: Scope) -> bool:
        deleted, _ = self._scoped(scope).filter(id=license_id).delete()
        return deleted > 0

    @sync_to_async
    def reassign_scope(self, from_scope: Scope, to_scope: Scope) -> int:
        return self._scoped(from_scope).update(
            scope_kind=to_scope.kind.value, scope_id=to_scope.id
        )
