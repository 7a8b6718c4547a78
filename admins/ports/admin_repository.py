"""
Admin repository port (interface).

This defines the contract for admin persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Optional

from admins.domain.admin import Admin


class AdminRepository(ABC):
    """
    Abstract repository for Admin entities.

    Admins are created by signup, so the port only reads.
    """

    @abstractmethod
    async def find_by_id(self, admin_id: uuid.UUID) -> Optional[Admin]:
        """
        Find an admin by ID.

        Args:
            admin_id: Admin UUID

        Returns:
            Admin entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Admin]:
        """
        Find an admin by normalized email.

        Args:
            email: Lowercased email address

        Returns:
            Admin entity or None if not found
        """
        pass
