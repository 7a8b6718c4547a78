"""
Quota models.
"""

import uuid

from django.db import models


class PurchaseReconciliation(models.Model):
    """
    One row per payment session credited to a scope.

    The unique ``session_id`` keeps a redirect replay from crediting twice.
    """

    SCOPE_KIND_CHOICES = [
        ("team", "Team"),
        ("admin", "Admin"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    session_id = models.CharField(max_length=255, unique=True)
    scope_kind = models.CharField(max_length=10, choices=SCOPE_KIND_CHOICES)
    scope_id = models.UUIDField(db_index=True)
    admin = models.ForeignKey(
        "admins.Admin",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="purchases",
    )
    license_count = models.PositiveIntegerField()
    total_after = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "purchase_reconciliations"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.session_id} (+{self.license_count})"
