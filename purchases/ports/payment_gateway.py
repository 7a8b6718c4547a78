"""
Payment gateway port (interface).

Checkout is handled by an external payment provider that redirects back to
the purchase completion endpoint.
"""

from abc import ABC, abstractmethod


class PaymentGateway(ABC):
    """Abstract payment provider client."""

    @abstractmethod
    async def create_checkout(self, name: str, email: str, license_count: int) -> str:
        """
        Start a checkout session.

        Args:
            name: Buyer's display name
            email: Buyer's email
            license_count: Licenses to buy

        Returns:
            Checkout URL to redirect the buyer to

        Raises:
            PaymentProviderError: If the provider call fails
        """
        pass
