"""
Email sender port (interface).

Transactional email is delivered by an external provider. Implementations
are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class SendResult:
    """Outcome of a send attempt."""

    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class DeliveryStatus:
    """Provider-reported state of a sent message."""

    message_id: str
    status: Optional[str]
    error: Optional[str] = None


class EmailSender(ABC):
    """Abstract transactional email sender."""

    @abstractmethod
    async def send(self, to: str, template: str, data: Dict[str, Any]) -> SendResult:
        """
        Render and send an email.

        Args:
            to: Recipient address
            template: Template name under ``notifications/emails/``
            data: Template context

        Returns:
            SendResult with the provider message id on success
        """
        pass

    @abstractmethod
    async def get_statuses(self, message_ids: List[str]) -> List[DeliveryStatus]:
        """
        Look up delivery status of sent messages.

        Args:
            message_ids: Provider message ids

        Returns:
            One DeliveryStatus per id, in input order
        """
        pass
