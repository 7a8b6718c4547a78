"""
Team models.
"""

import uuid

from django.db import models
from django.db.models import Q


class Team(models.Model):
    """
    Team of admins sharing one license pool.

    The team's ``domain`` restricts who can be invited.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    domain = models.CharField(max_length=255, db_index=True)
    owner = models.ForeignKey(
        "admins.Admin",
        on_delete=models.PROTECT,
        related_name="owned_teams",
    )
    purchased_license_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "teams"
        ordering = ["name"]

    def __str__(self):
        return self.name


class TeamMember(models.Model):
    """Membership of an admin in a team. An admin is in at most one team."""

    ROLE_CHOICES = [
        ("owner", "Owner"),
        ("admin", "Admin"),
        ("member", "Member"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="members")
    admin = models.OneToOneField(
        "admins.Admin",
        on_delete=models.CASCADE,
        related_name="team_membership",
    )
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default="member")
    joined_at = models.DateTimeField()

    class Meta:
        db_table = "team_members"
        ordering = ["joined_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["team"],
                condition=Q(role="owner"),
                name="unique_team_owner",
            ),
        ]

    def __str__(self):
        return f"{self.admin_id} in {self.team_id} ({self.role})"


class Invitation(models.Model):
    """Invitation for an email address to join a team."""

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("accepted", "Accepted"),
        ("cancelled", "Cancelled"),
        ("expired", "Expired"),
    ]

    ROLE_CHOICES = [
        ("admin", "Admin"),
        ("member", "Member"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="invitations")
    email = models.EmailField(db_index=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default="member")
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="pending")
    invited_by = models.ForeignKey(
        "admins.Admin",
        on_delete=models.CASCADE,
        related_name="sent_invitations",
    )
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField()
    message_id = models.CharField(max_length=255, null=True, blank=True)

    class Meta:
        db_table = "team_invitations"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["team", "status"]),
        ]

    def __str__(self):
        return f"{self.email} -> {self.team_id} ({self.status})"


class TeamActivity(models.Model):
    """Activity log entry for a team."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="activities")
    admin = models.ForeignKey(
        "admins.Admin",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="team_activities",
    )
    action = models.CharField(max_length=100)
    details = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "team_activities"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.action} ({self.team_id})"
