"""
License query handlers.

Handlers for listing licenses, computing statistics, building the export
table and looking up email delivery status.
"""

from typing import List

from core.domain.exceptions import ValidationError
from core.domain.value_objects import Scope
from licenses.application.dto.license_dto import ExportRow, LicenseListResult, LicenseStatistics
from licenses.application.handlers.base import LicenseHandlerBase
from licenses.application.queries.export_licenses import ExportLicensesQuery
from licenses.application.queries.get_email_statuses import GetEmailStatusesQuery
from licenses.application.queries.get_license_statistics import GetLicenseStatisticsQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.domain.license import License
from notifications.ports.email_sender import DeliveryStatus

NOT_AVAILABLE = "N/A"


class LicenseQueryHandler(LicenseHandlerBase):
    """Read-side handler for the licenses of a scope."""

    async def statistics_for(self, scope: Scope, licenses: List[License]) -> LicenseStatistics:
        """
        Compute statistics from a scope's licenses.

        Args:
            scope: Organization scope
            licenses: Licenses of the scope

        Returns:
            LicenseStatistics; available is None when unlimited
        """
        activated = sum(1 for license in licenses if license.is_activated)
        availability = await self.quota_ledger.available_licenses(scope)
        return LicenseStatistics(
            purchased=availability.purchased,
            assigned=len(licenses),
            activated=activated,
            pending=len(licenses) - activated,
            available=availability.remaining,
        )


class ListLicensesHandler(LicenseQueryHandler):
    """Handler for ListLicensesQuery."""

    async def handle(self, query: ListLicensesQuery) -> LicenseListResult:
        """
        Handle list licenses query.

        Args:
            query: ListLicensesQuery

        Returns:
            Licenses newest first, with statistics
        """
        _, scope = await self._context(query.admin_id)
        licenses = await self.license_repository.list_by_scope(scope)
        return LicenseListResult(
            licenses=licenses, statistics=await self.statistics_for(scope, licenses)
        )


class GetLicenseStatisticsHandler(LicenseQueryHandler):
    """Handler for GetLicenseStatisticsQuery."""

    async def handle(self, query: GetLicenseStatisticsQuery) -> LicenseStatistics:
        _, scope = await self._context(query.admin_id)
        licenses = await self.license_repository.list_by_scope(scope)
        return await self.statistics_for(scope, licenses)


class ExportLicensesHandler(LicenseHandlerBase):
    """Handler for ExportLicensesQuery."""

    @staticmethod
    def to_row(license: License) -> ExportRow:
        return ExportRow(
            email=license.email.value,
            status="Active" if license.is_activated else "Pending",
            date_added=license.created_at.date().isoformat(),
            activated_at=(
                license.activated_at.date().isoformat() if license.activated_at else NOT_AVAILABLE
            ),
        )

    async def handle(self, query: ExportLicensesQuery) -> List[ExportRow]:
        """
        Handle export query.

        Args:
            query: ExportLicensesQuery

        Returns:
            One row per license, in list order
        """
        _, scope = await self._context(query.admin_id)
        licenses = await self.license_repository.list_by_scope(scope)
        return [self.to_row(license) for license in licenses]


class GetEmailStatusesHandler(LicenseHandlerBase):
    """Handler for GetEmailStatusesQuery."""

    async def handle(self, query: GetEmailStatusesQuery) -> List[DeliveryStatus]:
        """
        Handle email status query.

        Args:
            query: GetEmailStatusesQuery

        Returns:
            Delivery status per message id

        Raises:
            ValidationError: If no message ids are given
        """
        await self._context(query.admin_id)
        message_ids = [mid for mid in query.message_ids if isinstance(mid, str) and mid.strip()]
        if not message_ids:
            raise ValidationError("Message IDs required")
        return await self.workflow.delivery_statuses(message_ids)
