"""
Serializers for License API endpoints.
"""

from rest_framework import serializers


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for create license request."""

    email = serializers.CharField(required=True, max_length=254)


class CreateLicensesBatchRequestSerializer(serializers.Serializer):
    """Serializer for batch create request."""

    emails = serializers.ListField(
        child=serializers.CharField(allow_blank=True, max_length=254),
        required=True,
        allow_empty=False,
    )


class UpdateLicenseEmailRequestSerializer(serializers.Serializer):
    """Serializer for change email request."""

    email = serializers.CharField(required=True, max_length=254)


class ImportLicensesRequestSerializer(serializers.Serializer):
    """Serializer for CSV import upload."""

    file = serializers.FileField(required=True)


class EmailStatusRequestSerializer(serializers.Serializer):
    """Serializer for delivery status lookup."""

    messageIds = serializers.ListField(
        child=serializers.CharField(), required=True, allow_empty=False
    )


class LicenseSerializer(serializers.Serializer):
    """Serializer for the License entity."""

    id = serializers.UUIDField()
    email = serializers.CharField(source="email.value")
    status = serializers.CharField()
    isActivated = serializers.BooleanField(source="is_activated")
    activatedAt = serializers.DateTimeField(source="activated_at", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")
    businessName = serializers.CharField(source="business_name")
    businessType = serializers.CharField(source="business_type")
    messageId = serializers.CharField(source="message_id", allow_null=True)


class LicenseStatisticsSerializer(serializers.Serializer):
    """Serializer for LicenseStatistics; a null available count means unlimited."""

    purchased = serializers.IntegerField()
    assigned = serializers.IntegerField()
    activated = serializers.IntegerField()
    pending = serializers.IntegerField()
    available = serializers.IntegerField(allow_null=True)


class LicenseListResponseSerializer(serializers.Serializer):
    """Serializer for LicenseListResult."""

    licenses = LicenseSerializer(many=True)
    statistics = LicenseStatisticsSerializer()


class CreateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for CreateLicenseResult."""

    message = serializers.SerializerMethodField()
    emailSent = serializers.BooleanField(source="email_sent")
    license = LicenseSerializer()

    def get_message(self, obj) -> str:
        if obj.email_sent:
            return "License added and activation email sent successfully"
        return "License added but failed to send activation email"


class UpdateLicenseEmailResponseSerializer(serializers.Serializer):
    """Serializer for UpdateEmailResult."""

    message = serializers.SerializerMethodField()
    license = LicenseSerializer()
    emailSent = serializers.BooleanField(source="email_sent")

    def get_message(self, obj) -> str:
        return "License email updated"


class BatchErrorSerializer(serializers.Serializer):
    """Serializer for BatchError."""

    email = serializers.CharField()
    reason = serializers.CharField()


class BatchResultSerializer(serializers.Serializer):
    """Serializer for BatchResult."""

    success = serializers.IntegerField()
    failed = serializers.IntegerField()
    emailsSent = serializers.IntegerField(source="emails_sent")
    emailsFailed = serializers.IntegerField(source="emails_failed")
    errors = BatchErrorSerializer(many=True)
    licenses = LicenseSerializer(many=True)


class BatchResponseSerializer(serializers.Serializer):
    """Serializer for batch and import responses."""

    message = serializers.CharField()
    results = BatchResultSerializer(source="*")


class DeliveryStatusSerializer(serializers.Serializer):
    """Serializer for DeliveryStatus."""

    messageId = serializers.CharField(source="message_id")
    status = serializers.CharField()
    error = serializers.CharField(allow_null=True)
