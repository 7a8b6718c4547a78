"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain.value_objects import Scope
from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    Every query is confined to one scope; a license id from another scope is
    treated as not found.
    """

    @abstractmethod
    async def add(self, license: License, enforce_quota: bool) -> License:
        """
        Insert a new license.

        With ``enforce_quota`` the insert happens only while the scope has
        fewer licenses than its purchased count, checked under a lock on the
        quota owner.

        Args:
            license: New license
            enforce_quota: Whether the scope is quota bounded

        Returns:
            Saved license

        Raises:
            DuplicateLicenseError: If the email already has a license in scope
            QuotaExceededError: If the scope is full
            PersistenceError: If the store rejects the write
        """
        pass

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Update an existing license.

        Raises:
            DuplicateLicenseError: If the new email clashes within the scope
        """
        pass

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID, scope: Scope) -> Optional[License]:
        """
        Find a license by ID within a scope.

        Args:
            license_id: License UUID
            scope: Caller's scope

        Returns:
            License entity or None if not found in the scope
        """
        pass

    @abstractmethod
    async def find_by_email(self, scope: Scope, email: str) -> Optional[License]:
        """
        Find the license of a normalized email in a scope.

        Args:
            scope: Organization scope
            email: Normalized email

        Returns:
            License entity or None
        """
        pass

    @abstractmethod
    async def list_by_scope(self, scope: Scope) -> List[License]:
        """
        List licenses of a scope, newest first (ties by id).

        Args:
            scope: Organization scope

        Returns:
            List of licenses
        """
        pass

    @abstractmethod
    async def count_by_scope(self, scope: Scope) -> int:
        pass

    @abstractmethod
    async def delete(self, license_id: uuid.UUID, scope: Scope) -> bool:
        """
        Delete a license within a scope.

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def reassign_scope(self, from_scope: Scope, to_scope: Scope) -> int:
        """
        Move every license of one scope into another.

        Returns:
            Number of licenses moved
        """
        pass
