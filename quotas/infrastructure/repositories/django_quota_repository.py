"""
Django implementation of QuotaRepository port.
"""

import logging
import uuid
from typing import Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import F

from core.domain.value_objects import Scope
from licenses.infrastructure.models import License as LicenseModel
from quotas.domain.ledger import PurchaseOutcome
from quotas.infrastructure.models import PurchaseReconciliation
from quotas.infrastructure.owners import missing_owner_error, purchased_count, quota_owner_queryset
from quotas.ports.quota_repository import QuotaRepository

logger = logging.getLogger(__name__)


class DjangoQuotaRepository(QuotaRepository):
    """Django ORM implementation of QuotaRepository."""

    @sync_to_async
    def get_purchased_count(self, scope: Scope) -> int:
        return purchased_count(scope)

    @sync_to_async
    def count_assigned(self, scope: Scope) -> int:
        return LicenseModel.objects.filter(
            scope_kind=scope.kind.value, scope_id=scope.id
        ).count()

    @sync_to_async
    def apply_purchase(
        self,
        scope: Scope,
        added_count: int,
        session_id: str,
        admin_id: Optional[uuid.UUID] = None,
    ) -> PurchaseOutcome:
        existing = PurchaseReconciliation.objects.filter(session_id=session_id).first()
        if existing:
            return self._replayed(existing)

        try:
            with transaction.atomic():
                record = PurchaseReconciliation.objects.create(
                    session_id=session_id,
                    scope_kind=scope.kind.value,
                    scope_id=scope.id,
                    admin_id=admin_id,
                    license_count=added_count,
                )
                updated = quota_owner_queryset(scope).update(
                    purchased_license_count=F("purchased_license_count") + added_count
                )
                if not updated:
                    raise missing_owner_error(scope)
                record.total_after = purchased_count(scope)
                record.save(update_fields=["total_after"])
        except IntegrityError:
            # A concurrent request recorded the same session first.
            logger.info("Purchase session already recorded", extra={"session_id": session_id})
            return self._replayed(PurchaseReconciliation.objects.get(session_id=session_id))

        return PurchaseOutcome(total=record.total_after, added=added_count, replayed=False)

    @staticmethod
    def _replayed(record: PurchaseReconciliation) -> PurchaseOutcome:
        return PurchaseOutcome(
            total=record.total_after, added=record.license_count, replayed=True
        )
