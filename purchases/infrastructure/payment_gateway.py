"""
HTTP payment gateway.

Posts checkout requests to the payment provider API and returns the hosted
checkout URL.
"""

import logging

import requests
from asgiref.sync import sync_to_async
from django.conf import settings

from core.domain.exceptions import PaymentProviderError
from purchases.ports.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)

CHECKOUT_PATH = "/stripe/buy-licenses"


class HttpPaymentGateway(PaymentGateway):
    """Payment gateway for the provider's license checkout API."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 10):
        """
        Initialize gateway.

        Args:
            base_url: Provider API base URL
            api_key: Value of the ``x-api-key`` header
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    async def create_checkout(self, name: str, email: str, license_count: int) -> str:
        return await sync_to_async(self._post_checkout, thread_sensitive=False)(
            name, email, license_count
        )

    def _post_checkout(self, name: str, email: str, license_count: int) -> str:
        try:
            response = requests.post(
                f"{self.base_url}{CHECKOUT_PATH}",
                json={"name": name, "email": email, "numberOfLicenses": license_count},
                headers={"x-api-key": self.api_key, "Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            url = (response.json().get("data") or {}).get("url")
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error("Checkout request failed: %s", e)
            raise PaymentProviderError() from e

        if not url:
            raise PaymentProviderError("No checkout URL received")
        return url


def build_payment_gateway() -> PaymentGateway:
    """Build the gateway from ``PAYMENT_API_*`` settings."""
    return HttpPaymentGateway(
        base_url=settings.PAYMENT_API_BASE_URL,
        api_key=settings.PAYMENT_API_KEY,
        timeout=settings.PAYMENT_PROVIDER_TIMEOUT,
    )
