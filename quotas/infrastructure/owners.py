"""
Quota owner lookup.

Maps a scope to the Django model row that stores its purchased count.
"""

from django.db import models

from admins.infrastructure.models import Admin as AdminModel
from core.domain.exceptions import AdminNotFoundError, TeamNotFoundError
from core.domain.value_objects import Scope, ScopeKind
from teams.infrastructure.models import Team as TeamModel


def quota_owner_queryset(scope: Scope) -> models.QuerySet:
    """Queryset selecting the owner row of a scope."""
    if scope.kind is ScopeKind.TEAM:
        return TeamModel.objects.filter(id=scope.id)
    if scope.kind is ScopeKind.ADMIN:
        return AdminModel.objects.filter(id=scope.id)
    raise ValueError(f"Unknown scope kind: {scope.kind}")


def missing_owner_error(scope: Scope):
    if scope.kind is ScopeKind.TEAM:
        return TeamNotFoundError(f"Team {scope.id} not found")
    return AdminNotFoundError(f"Admin {scope.id} not found")


def purchased_count(scope: Scope, lock: bool = False) -> int:
    """
    Read the purchased license count of a scope owner.

    Args:
        scope: Organization scope
        lock: Take a row lock; only valid inside ``transaction.atomic``

    Returns:
        Purchased license count

    Raises:
        TeamNotFoundError, AdminNotFoundError: If the owner row is missing
    """
    queryset = quota_owner_queryset(scope)
    if lock:
        queryset = queryset.select_for_update()
    values = queryset.values_list("purchased_license_count", flat=True)
    count = values.first()
    if count is None:
        raise missing_owner_error(scope)
    return count
