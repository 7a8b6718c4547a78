"""
Create license handlers.

Handles single and batch license creation, and table imports that feed the
batch path.
"""

import logging

from core.domain.exceptions import (
    DomainException,
    LicenseException,
    PersistenceError,
    ValidationError,
)
from core.domain.value_objects import Email
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.create_licenses_batch import CreateLicensesBatchCommand
from licenses.application.commands.import_licenses import ImportLicensesCommand
from licenses.application.dto.license_dto import BatchError, BatchResult, CreateLicenseResult
from licenses.application.handlers.base import LicenseHandlerBase

logger = logging.getLogger(__name__)


class CreateLicenseHandler(LicenseHandlerBase):
    """Handler for CreateLicenseCommand."""

    async def handle(self, command: CreateLicenseCommand) -> CreateLicenseResult:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            CreateLicenseResult with the saved license and the send outcome

        Raises:
            InvalidEmailError: If the email is malformed
            QuotaExceededError: If the scope has no available license
            DuplicateLicenseError: If the email already has a license in scope
            PersistenceError: If the license could not be saved
        """
        admin, scope = await self._context(command.admin_id)
        email = Email.normalize(command.email)
        await self._admit(scope, 1)

        license = await self._insert(admin, scope, email)
        license, notification = await self._send_activation(license, admin)

        logger.info(
            "License created",
            extra={
                "license_id": str(license.id),
                "scope": str(scope),
                "email_sent": notification.success,
            },
        )
        return CreateLicenseResult(license=license, notification=notification)


class CreateLicensesBatchHandler(LicenseHandlerBase):
    """Handler for CreateLicensesBatchCommand."""

    async def handle(self, command: CreateLicensesBatchCommand) -> BatchResult:
        """
        Handle batch create command.

        The quota check covers the whole batch before anything is created.
        Emails are then processed in order; a failing email is reported in
        ``errors`` and does not stop the rest.

        Args:
            command: CreateLicensesBatchCommand

        Returns:
            BatchResult

        Raises:
            ValidationError: If no emails are given
            QuotaExceededError: If the batch does not fit in the scope
        """
        admin, scope = await self._context(command.admin_id)
        if not command.emails:
            raise ValidationError("Please provide at least one email address")

        await self._admit(scope, len(command.emails))

        result = BatchResult()
        for raw in command.emails:
            label = raw.strip() if isinstance(raw, str) else str(raw)
            try:
                license = await self._insert(admin, scope, Email.normalize(raw))
            except (ValidationError, LicenseException, PersistenceError) as e:
                result.failed += 1
                result.errors.append(BatchError(email=label, reason=e.message))
                continue

            result.success += 1
            license, notification = await self._send_activation(license, admin)
            if notification.success:
                result.emails_sent += 1
            else:
                result.emails_failed += 1
            result.licenses.append(license)

        logger.info(result.message, extra={"scope": str(scope)})
        return result


class ImportLicensesHandler:
    """Handler for ImportLicensesCommand."""

    def __init__(self, batch_handler: CreateLicensesBatchHandler):
        """Initialize handler with the batch handler it delegates to."""
        self.batch_handler = batch_handler

    @staticmethod
    def extract_emails(rows) -> list:
        """
        Take the first column of every row after the header.

        Blank values are dropped.
        """
        emails = []
        for row in list(rows)[1:]:
            if not row:
                continue
            value = str(row[0]).strip()
            if value:
                emails.append(value)
        return emails

    async def handle(self, command: ImportLicensesCommand) -> BatchResult:
        """
        Handle import command.

        Args:
            command: ImportLicensesCommand

        Returns:
            BatchResult of the delegated batch

        Raises:
            ValidationError: If the table has no emails
            QuotaExceededError: If the emails do not fit in the scope
        """
        emails = self.extract_emails(command.rows)
        if not emails:
            raise ValidationError("No email addresses found in file")
        try:
            return await self.batch_handler.handle(
                CreateLicensesBatchCommand(admin_id=command.admin_id, emails=emails)
            )
        except DomainException as e:
            logger.warning("License import rejected: %s", e.message)
            raise
