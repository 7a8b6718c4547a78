"""
License management handlers.

Handlers for removing licenses, changing their email and resending the
activation email.
"""

import logging

from core.domain.exceptions import DuplicateLicenseError, NotificationSendError
from core.domain.value_objects import Email
from licenses.application.commands.remove_license import RemoveLicenseCommand
from licenses.application.commands.resend_activation import ResendActivationCommand
from licenses.application.commands.update_license_email import UpdateLicenseEmailCommand
from licenses.application.dto.license_dto import UpdateEmailResult
from licenses.application.handlers.base import LicenseHandlerBase
from licenses.domain.events import ActivationResent, LicenseEmailChanged, LicenseRemoved
from notifications.ports.email_sender import SendResult

logger = logging.getLogger(__name__)


class RemoveLicenseHandler(LicenseHandlerBase):
    """Handler for RemoveLicenseCommand."""

    async def handle(self, command: RemoveLicenseCommand) -> None:
        """
        Handle remove license command.

        Args:
            command: RemoveLicenseCommand

        Raises:
            LicenseNotFoundError: If the license is not in the admin's scope
        """
        admin, scope = await self._context(command.admin_id)
        license = await self._get_license(command.license_id, scope)

        await self.license_repository.delete(license.id, scope)

        await self.event_bus.publish(
            LicenseRemoved(
                license_id=license.id,
                scope=scope,
                email=license.email.value,
                actor_id=admin.id,
            )
        )


class UpdateLicenseEmailHandler(LicenseHandlerBase):
    """Handler for UpdateLicenseEmailCommand."""

    async def handle(self, command: UpdateLicenseEmailCommand) -> UpdateEmailResult:
        """
        Handle update license email command.

        The license gets a fresh activation email at the new address.

        Args:
            command: UpdateLicenseEmailCommand

        Returns:
            UpdateEmailResult

        Raises:
            InvalidEmailError: If the new email is malformed
            LicenseNotFoundError: If the license is not in the admin's scope
            LicenseAlreadyActivatedError: If the license is activated
            DuplicateLicenseError: If another license uses the new email
        """
        admin, scope = await self._context(command.admin_id)
        new_email = Email.normalize(command.email)
        license = await self._get_license(command.license_id, scope)
        license.ensure_pending()

        if new_email == license.email:
            return UpdateEmailResult(license=license, notification=SendResult(success=False))

        existing = await self.license_repository.find_by_email(scope, new_email.value)
        if existing and existing.id != license.id:
            raise DuplicateLicenseError(f"License already exists for: {new_email}")

        old_email = license.email.value
        license = await self.license_repository.save(license.change_email(new_email))

        await self.event_bus.publish(
            LicenseEmailChanged(
                license_id=license.id,
                scope=scope,
                old_email=old_email,
                new_email=new_email.value,
                actor_id=admin.id,
            )
        )

        license, notification = await self._send_activation(license, admin)
        return UpdateEmailResult(license=license, notification=notification)


class ResendActivationHandler(LicenseHandlerBase):
    """Handler for ResendActivationCommand."""

    async def handle(self, command: ResendActivationCommand) -> SendResult:
        """
        Handle resend activation command.

        Args:
            command: ResendActivationCommand

        Returns:
            SendResult of the new email

        Raises:
            LicenseNotFoundError: If the license is not in the admin's scope
            LicenseAlreadyActivatedError: If the license is activated
            NotificationSendError: If the email could not be sent
        """
        admin, scope = await self._context(command.admin_id)
        license = await self._get_license(command.license_id, scope)
        license.ensure_pending()

        license, result = await self._send_activation(license, admin)
        if not result.success:
            raise NotificationSendError(result.error or "Failed to send email")

        await self.event_bus.publish(
            ActivationResent(
                license_id=license.id,
                scope=scope,
                email=license.email.value,
                actor_id=admin.id,
            )
        )
        return result
