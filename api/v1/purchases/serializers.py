"""
Serializers for Purchase API endpoints.
"""

from rest_framework import serializers


class StartCheckoutRequestSerializer(serializers.Serializer):
    """Serializer for checkout request; the count is validated by the handler."""

    licenseCount = serializers.JSONField(required=True)


class CompletePurchaseRequestSerializer(serializers.Serializer):
    """Serializer for purchase completion request."""

    licenseCount = serializers.JSONField(required=True)
    sessionId = serializers.CharField(required=False, allow_blank=True, max_length=255)


class CheckoutResponseSerializer(serializers.Serializer):
    """Serializer for checkout response."""

    checkoutUrl = serializers.URLField()


class PurchaseResultSerializer(serializers.Serializer):
    """Serializer for PurchaseResultDTO."""

    success = serializers.SerializerMethodField()
    message = serializers.CharField()
    licenses_added = serializers.IntegerField()
    total_licenses = serializers.IntegerField()
    replayed = serializers.BooleanField()

    def get_success(self, obj) -> bool:
        return True
