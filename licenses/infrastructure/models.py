"""
License models.
"""

import uuid

from django.db import models
from django.utils import timezone


class License(models.Model):
    """
    License assigned to an email inside a team or solo-admin scope.

    ``scope_kind``/``scope_id`` point at a Team or an Admin row.
    """

    SCOPE_KIND_CHOICES = [
        ("team", "Team"),
        ("admin", "Admin"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    scope_kind = models.CharField(max_length=10, choices=SCOPE_KIND_CHOICES)
    scope_id = models.UUIDField()
    email = models.EmailField()
    business_name = models.CharField(max_length=255, blank=True, default="")
    business_type = models.CharField(max_length=255, blank=True, default="")
    is_activated = models.BooleanField(default=False)
    created_by = models.ForeignKey(
        "admins.Admin",
        on_delete=models.SET_NULL,
        null=True,
        related_name="created_licenses",
    )
    message_id = models.CharField(max_length=255, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)
    activated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["scope_kind", "scope_id", "email"],
                name="unique_license_email_per_scope",
            ),
        ]
        indexes = [
            models.Index(fields=["scope_kind", "scope_id"]),
            models.Index(fields=["message_id"]),
        ]

    def __str__(self):
        return f"{self.email} ({self.scope_kind}:{self.scope_id})"
