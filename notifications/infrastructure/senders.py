"""
Email sender adapters.

``ResendEmailSender`` posts to an HTTP email API. ``DjangoMailEmailSender``
goes through the configured Django mail backend and is used in
development and tests.
"""

import logging
from typing import Any, Dict, List

import requests
from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.core.mail.message import make_msgid

from notifications.infrastructure.rendering import render_email
from notifications.ports.email_sender import DeliveryStatus, EmailSender, SendResult

logger = logging.getLogger(__name__)


class ResendEmailSender(EmailSender):
    """Sender for an HTTP transactional email API."""

    def __init__(self, api_key: str, base_url: str, from_email: str, timeout: float = 10):
        """
        Initialize sender.

        Args:
            api_key: Provider API key
            base_url: Provider API base URL
            from_email: Sender address
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.from_email = from_email
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, to: str, template: str, data: Dict[str, Any]) -> SendResult:
        if not self.api_key:
            return SendResult(success=False, error="Email provider API key is not configured")
        rendered = render_email(template, data)
        payload = {
            "from": self.from_email,
            "to": [to],
            "subject": rendered.subject,
            "html": rendered.html,
            "text": rendered.text,
        }
        return await sync_to_async(self._post, thread_sensitive=False)(payload)

    def _post(self, payload: Dict[str, Any]) -> SendResult:
        try:
            response = requests.post(
                f"{self.base_url}/emails",
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning("Email provider request failed: %s", e)
            return SendResult(success=False, error=str(e))
        return SendResult(success=True, message_id=response.json().get("id"))

    async def get_statuses(self, message_ids: List[str]) -> List[DeliveryStatus]:
        return await sync_to_async(self._fetch_statuses, thread_sensitive=False)(message_ids)

    def _fetch_statuses(self, message_ids: List[str]) -> List[DeliveryStatus]:
        statuses = []
        for message_id in message_ids:
            try:
                response = requests.get(
                    f"{self.base_url}/emails/{message_id}",
                    headers=self._headers(),
                    timeout=self.timeout,
                )
                response.raise_for_status()
                statuses.append(
                    DeliveryStatus(message_id=message_id, status=response.json().get("last_event"))
                )
            except requests.exceptions.RequestException as e:
                logger.warning("Email status lookup failed for %s: %s", message_id, e)
                statuses.append(DeliveryStatus(message_id=message_id, status=None, error=str(e)))
        return statuses


class DjangoMailEmailSender(EmailSender):
    """Sender backed by ``django.core.mail``."""

    def __init__(self, from_email: str):
        self.from_email = from_email

    async def send(self, to: str, template: str, data: Dict[str, Any]) -> SendResult:
        rendered = render_email(template, data)
        return await sync_to_async(self._deliver)(to, rendered)

    def _deliver(self, to, rendered) -> SendResult:
        message_id = make_msgid()
        message = EmailMultiAlternatives(
            subject=rendered.subject,
            body=rendered.text,
            from_email=self.from_email,
            to=[to],
            headers={"Message-ID": message_id},
        )
        message.attach_alternative(rendered.html, "text/html")
        sent = message.send()
        if not sent:
            return SendResult(success=False, error="Mail backend did not accept the message")
        return SendResult(success=True, message_id=message_id)

    async def get_statuses(self, message_ids: List[str]) -> List[DeliveryStatus]:
        # The mail backend keeps no delivery history.
        return [DeliveryStatus(message_id=mid, status="sent") for mid in message_ids]


def build_email_sender() -> EmailSender:
    """
    Build the sender selected by ``EMAIL_SENDER_BACKEND``.

    Returns:
        ResendEmailSender for ``resend``, DjangoMailEmailSender otherwise
    """
    if settings.EMAIL_SENDER_BACKEND == "resend":
        return ResendEmailSender(
            api_key=settings.EMAIL_PROVIDER_API_KEY,
            base_url=settings.EMAIL_PROVIDER_BASE_URL,
            from_email=settings.DEFAULT_FROM_EMAIL,
            timeout=settings.EMAIL_PROVIDER_TIMEOUT,
        )
    return DjangoMailEmailSender(from_email=settings.DEFAULT_FROM_EMAIL)
