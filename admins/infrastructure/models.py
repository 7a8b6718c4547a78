"""
Admin model.
"""

import uuid

from django.conf import settings
from django.db import models


class Admin(models.Model):
    """
    Administrator profile linked to an authentication user.

    Solo admins keep their purchased license count here; once in a team the
    team's count applies.
    """

    ROLE_CHOICES = [
        ("admin", "Admin"),
        ("user", "User"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="admin_profile",
        null=True,
        blank=True,
    )
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=150, blank=True, default="")
    last_name = models.CharField(max_length=150, blank=True, default="")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="admin")
    purchased_license_count = models.PositiveIntegerField(default=0)
    active_purchased_license_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "admins"
        ordering = ["email"]

    def __str__(self):
        return self.email

    def save(self, *args, **kwargs):
        """Store email lowercased."""
        self.email = self.email.strip().lower()
        super().save(*args, **kwargs)
