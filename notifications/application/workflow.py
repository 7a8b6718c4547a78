"""
Invitation workflow.

Builds activation and team-invitation emails and hands them to the email
sender. A failed send is reported in the result and never raised, so the
license or invitation that triggered it stays saved.
"""

import logging
from typing import List
from urllib.parse import urlencode

from core.metrics import notifications_total
from licenses.domain.license import License
from notifications.domain.brand import PartnerBrand
from notifications.ports.email_sender import DeliveryStatus, EmailSender, SendResult
from teams.domain.invitation import Invitation

logger = logging.getLogger(__name__)

LICENSE_ACTIVATION_TEMPLATE = "license_activation"
TEAM_INVITATION_TEMPLATE = "team_invitation"


class InvitationWorkflow:
    """Sends license activation and team invitation notifications."""

    def __init__(self, email_sender: EmailSender, app_base_url: str, invitation_ttl_days: int = 7):
        """
        Initialize workflow.

        Args:
            email_sender: Sender adapter
            app_base_url: Public URL of the end-user application
            invitation_ttl_days: Shown in invitation emails
        """
        self.email_sender = email_sender
        self.app_base_url = app_base_url.rstrip("/")
        self.invitation_ttl_days = invitation_ttl_days

    def activation_url(self, license: License, brand: PartnerBrand) -> str:
        query = urlencode({"licenseId": str(license.id), "ref": brand.ref, "org": brand.slug})
        return f"{self.app_base_url}/register?{query}"

    def invitation_url(self, invitation: Invitation) -> str:
        return f"{self.app_base_url}/team/invite?{urlencode({'invitationId': str(invitation.id)})}"

    async def send_license_activation(
        self, license: License, inviter_name: str, brand: PartnerBrand
    ) -> SendResult:
        """
        Send the activation email for a license.

        Args:
            license: Pending license
            inviter_name: Name of the admin who assigned the license
            brand: Partner branding

        Returns:
            SendResult
        """
        data = {
            "email": license.email.value,
            "activation_url": self.activation_url(license, brand),
            "admin_name": inviter_name,
            "edc": brand.template_context(),
        }
        return await self._send("license_activation", license.email.value,
                                LICENSE_ACTIVATION_TEMPLATE, data)

    async def send_team_invitation(
        self, invitation: Invitation, inviter_name: str, team_name: str, brand: PartnerBrand
    ) -> SendResult:
        """
        Send the invitation email for a team invitation.

        Args:
            invitation: Pending invitation
            inviter_name: Name of the inviting admin
            team_name: Team display name
            brand: Partner branding

        Returns:
            SendResult
        """
        role = invitation.role.value
        data = {
            "email": invitation.email.value,
            "inviter_name": inviter_name,
            "team_name": team_name,
            "invite_url": self.invitation_url(invitation),
            "role": role,
            "role_display": "an Admin" if role == "admin" else "a Team Member",
            "expires_in_days": self.invitation_ttl_days,
            "edc": brand.template_context(),
        }
        return await self._send("team_invitation", invitation.email.value,
                                TEAM_INVITATION_TEMPLATE, data)

    async def delivery_statuses(self, message_ids: List[str]) -> List[DeliveryStatus]:
        """
        Look up provider delivery status for sent messages.

        Args:
            message_ids: Message ids stored on licenses

        Returns:
            One status per id, in input order
        """
        return await self.email_sender.get_statuses(list(message_ids))

    async def _send(self, kind: str, to: str, template: str, data) -> SendResult:
        try:
            result = await self.email_sender.send(to, template, data)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error sending %s email to %s: %s", kind, to, e, exc_info=True)
            result = SendResult(success=False, error=str(e))

        outcome = "sent" if result.success else "failed"
        notifications_total.labels(kind=kind, outcome=outcome).inc()
        if result.success:
            logger.info("%s email sent", kind, extra={"to": to, "message_id": result.message_id})
        else:
            logger.warning("%s email failed", kind, extra={"to": to, "error": result.error})
        return result
