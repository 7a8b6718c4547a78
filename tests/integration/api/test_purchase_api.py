"""
Integration tests for Purchase API endpoints.
"""

from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlparse

import pytest
import requests
from django.urls import reverse

from admins.infrastructure.models import Admin as AdminModel
from quotas.infrastructure.models import PurchaseReconciliation


def _redirect_params(response):
    location = urlparse(response["Location"])
    return location.path, {k: v[0] for k, v in parse_qs(location.query).items()}


@pytest.mark.django_db
@pytest.mark.integration
class TestCompletePurchaseAPI:
    """Integration tests for the purchase completion endpoints."""

    def test_complete_purchase(self, admin_client, console_admin):
        response = admin_client.post(
            reverse("purchases-complete"), {"licenseCount": 2, "sessionId": "cs_1"}, format="json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert (body["licenses_added"], body["total_licenses"], body["replayed"]) == (2, 5, False)
        console_admin.refresh_from_db()
        assert console_admin.purchased_license_count == 5

    def test_replayed_session_is_credited_once(self, admin_client, console_admin):
        url = reverse("purchases-complete")
        admin_client.post(url, {"licenseCount": 2, "sessionId": "cs_1"}, format="json")

        response = admin_client.post(url, {"licenseCount": 2, "sessionId": "cs_1"}, format="json")

        assert response.json()["replayed"] is True
        assert response.json()["total_licenses"] == 5
        console_admin.refresh_from_db()
        assert console_admin.purchased_license_count == 5

    def test_idempotency_key_header(self, admin_client, console_admin):
        url = reverse("purchases-complete")
        for _ in range(2):
            admin_client.post(url, {"licenseCount": 1}, format="json", HTTP_IDEMPOTENCY_KEY="k-1")

        console_admin.refresh_from_db()
        assert console_admin.purchased_license_count == 4
        assert PurchaseReconciliation.objects.filter(session_id="k-1").count() == 1

    def test_invalid_count(self, admin_client):
        response = admin_client.post(
            reverse("purchases-complete"), {"licenseCount": "zero"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_QUANTITY"

    def test_team_purchase(self, admin_client):
        team = admin_client.post(reverse("teams"), {}, format="json").json()["team"]

        response = admin_client.post(
            reverse("purchases-complete"),
            {"licenseCount": "4", "sessionId": "cs_team"},
            format="json",
        )

        assert response.json()["total_licenses"] == team["purchasedLicenseCount"] + 4

    def test_missing_session_is_rejected(self, admin_client, console_admin):
        response = admin_client.post(
            reverse("purchases-complete"), {"licenseCount": 2}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_SESSION_ID"
        console_admin.refresh_from_db()
        assert console_admin.purchased_license_count == 3

    def test_solo_purchase_shows_in_statistics(self, admin_client):
        admin_client.post(
            reverse("purchases-complete"), {"licenseCount": 4, "sessionId": "cs_4"}, format="json"
        )

        stats = admin_client.get(reverse("licenses-stats")).json()

        assert stats["purchased"] == 7
        assert stats["available"] is None

    def test_requires_login(self, api_client):
        response = api_client.post(reverse("purchases-complete"), {"licenseCount": 1},
                                   format="json")

        assert response.status_code == 401


@pytest.mark.django_db
@pytest.mark.integration
class TestPurchaseRedirectAPI:
    """Integration tests for the payment provider landing endpoint."""

    def _get(self, client, **params):
        query = {"payment": "successful", "paymentType": "license_purchase", **params}
        return client.get(reverse("purchases-complete-redirect"), query)

    @pytest.mark.parametrize("override", [{"payment": "failed"}, {"paymentType": "other"}])
    def test_payment_failed(self, admin_client, override):
        response = self._get(admin_client, licenseCount="2", **override)

        assert response.status_code == 302
        assert _redirect_params(response) == ("/admin/dashboard", {"error": "payment_failed"})

    def test_success(self, admin_client, console_admin):
        response = self._get(admin_client, licenseCount="2", session_id="cs_9")

        path, params = _redirect_params(response)
        assert path == "/admin/dashboard"
        assert params == {
            "success": "purchase_complete",
            "licenses_added": "2",
            "total_licenses": "5",
        }
        assert AdminModel.objects.get(id=console_admin.id).purchased_license_count == 5

    def test_invalid_count(self, admin_client):
        response = self._get(admin_client, licenseCount="-3", session_id="cs_bad")

        assert _redirect_params(response)[1] == {"error": "invalid_license_count"}

    def test_repeated_redirect_is_credited_once(self, admin_client, console_admin):
        """Test a refreshed landing page does not credit the purchase again."""
        first = self._get(admin_client, licenseCount="2", session_id="cs_back")
        second = self._get(admin_client, licenseCount="2", session_id="cs_back")

        assert _redirect_params(first)[1]["total_licenses"] == "5"
        assert _redirect_params(second)[1]["total_licenses"] == "5"
        assert AdminModel.objects.get(id=console_admin.id).purchased_license_count == 5

    def test_redirect_without_session_id(self, admin_client, console_admin):
        for _ in range(2):
            response = self._get(admin_client, licenseCount="2")
            assert _redirect_params(response)[1] == {"error": "payment_failed"}

        assert AdminModel.objects.get(id=console_admin.id).purchased_license_count == 3

    def test_without_login(self, api_client):
        response = self._get(api_client, licenseCount="2", session_id="cs_9")

        assert response.status_code == 302
        assert _redirect_params(response)[1] == {"error": "admin_not_found"}


@pytest.mark.django_db
@pytest.mark.integration
class TestCheckoutAPI:
    """Integration tests for starting a checkout."""

    def test_checkout(self, admin_client):
        provider = MagicMock()
        provider.json.return_value = {"data": {"url": "https://checkout.example.com/cs_1"}}

        with patch("purchases.infrastructure.payment_gateway.requests.post",
                   return_value=provider) as post:
            response = admin_client.post(
                reverse("purchases-checkout"), {"licenseCount": 3}, format="json"
            )

        assert response.status_code == 200
        assert response.json() == {"checkoutUrl": "https://checkout.example.com/cs_1"}
        assert post.call_args.kwargs["json"] == {
            "name": "Alice Anders",
            "email": "alice@budaedc.com",
            "numberOfLicenses": 3,
        }

    def test_provider_down(self, admin_client):
        with patch("purchases.infrastructure.payment_gateway.requests.post",
                   side_effect=requests.exceptions.Timeout("slow")):
            response = admin_client.post(
                reverse("purchases-checkout"), {"licenseCount": 3}, format="json"
            )

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "PAYMENT_PROVIDER_ERROR"
