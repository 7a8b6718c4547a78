"""
Serializers for Team API endpoints.
"""

from rest_framework import serializers


class CreateTeamRequestSerializer(serializers.Serializer):
    """Serializer for create team request; the name is optional."""

    name = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RenameTeamRequestSerializer(serializers.Serializer):
    """Serializer for rename team request."""

    name = serializers.CharField(required=True, allow_blank=True)


class InviteMemberRequestSerializer(serializers.Serializer):
    """Serializer for invite member request."""

    email = serializers.CharField(required=True, max_length=254)
    role = serializers.CharField(required=False, default="member")


class UpdateMemberRoleRequestSerializer(serializers.Serializer):
    """Serializer for role change request."""

    role = serializers.CharField(required=True)


class TeamSerializer(serializers.Serializer):
    """Serializer for the Team entity."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    domain = serializers.CharField()
    ownerId = serializers.UUIDField(source="owner_id")
    purchasedLicenseCount = serializers.IntegerField(source="purchased_license_count")
    createdAt = serializers.DateTimeField(source="created_at")


class TeamMemberSerializer(serializers.Serializer):
    """Serializer for the TeamMember entity."""

    id = serializers.UUIDField()
    adminId = serializers.UUIDField(source="admin_id")
    email = serializers.CharField(allow_null=True)
    fullName = serializers.CharField(source="full_name")
    role = serializers.CharField(source="role.value")
    joinedAt = serializers.DateTimeField(source="joined_at")


class InvitationSerializer(serializers.Serializer):
    """Serializer for the Invitation entity."""

    id = serializers.UUIDField()
    email = serializers.CharField(source="email.value")
    role = serializers.CharField(source="role.value")
    status = serializers.CharField(source="status.value")
    invitedBy = serializers.UUIDField(source="invited_by")
    expiresAt = serializers.DateTimeField(source="expires_at")
    createdAt = serializers.DateTimeField(source="created_at")


class TeamOverviewSerializer(serializers.Serializer):
    """Serializer for TeamOverviewDTO."""

    team = TeamSerializer(allow_null=True)
    role = serializers.CharField(allow_null=True)
    isOwner = serializers.BooleanField(source="is_owner")
    members = TeamMemberSerializer(many=True)
    invitations = InvitationSerializer(many=True)


class CreateTeamResponseSerializer(serializers.Serializer):
    """Serializer for CreateTeamResult."""

    team = TeamSerializer()
    relocatedLicenses = serializers.IntegerField(source="relocated_licenses")


class InviteMemberResponseSerializer(serializers.Serializer):
    """Serializer for InviteMemberResult."""

    invitation = InvitationSerializer()
    emailSent = serializers.BooleanField(source="email_sent")
