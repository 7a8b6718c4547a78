"""
Integration tests for License API endpoints.
"""

import uuid

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from licenses.infrastructure.models import License as LicenseModel


def _create(client, email):
    return client.post(reverse("licenses"), {"email": email}, format="json")


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseAuth:
    """Authentication checks shared by console endpoints."""

    def test_requires_login(self, api_client):
        response = api_client.get(reverse("licenses"))

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_requires_admin_profile(self, api_client):
        user = get_user_model().objects.create_user(username="visitor", password="pw")
        api_client.force_login(user)

        response = api_client.get(reverse("licenses"))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseAPI:
    """Integration tests for License API."""

    def test_create_license(self, admin_client, console_admin, mailoutbox):
        response = _create(admin_client, " Bob@Example.com ")

        assert response.status_code == 201
        body = response.json()
        assert body["emailSent"] is True
        assert body["message"] == "License added and activation email sent successfully"
        assert body["license"]["email"] == "bob@example.com"
        assert body["license"]["status"] == "pending"
        assert body["license"]["messageId"]
        assert [m.to for m in mailoutbox] == [["bob@example.com"]]
        stored = LicenseModel.objects.get(id=body["license"]["id"])
        assert (stored.scope_kind, stored.scope_id) == ("admin", console_admin.id)

    def test_create_duplicate(self, admin_client):
        _create(admin_client, "bob@example.com")

        response = _create(admin_client, "BOB@example.com")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_LICENSE"

    def test_create_invalid_email(self, admin_client):
        response = _create(admin_client, "not-an-email")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_EMAIL"

    def test_create_missing_email(self, admin_client):
        response = admin_client.post(reverse("licenses"), {}, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_list_and_stats(self, admin_client):
        _create(admin_client, "a@example.com")
        _create(admin_client, "b@example.com")

        listed = admin_client.get(reverse("licenses")).json()
        stats = admin_client.get(reverse("licenses-stats")).json()

        assert [lic["email"] for lic in listed["licenses"]] == ["b@example.com", "a@example.com"]
        assert listed["statistics"] == stats
        assert stats == {
            "purchased": 3,
            "assigned": 2,
            "activated": 0,
            "pending": 2,
            "available": None,
        }

    def test_batch(self, admin_client):
        _create(admin_client, "a@example.com")

        response = admin_client.post(
            reverse("licenses-batch"),
            {"emails": ["a@example.com", "c@example.com", "bad", ""]},
            format="json",
        )

        assert response.status_code == 200
        results = response.json()["results"]
        assert results["success"] == 1
        assert results["emailsSent"] == 1
        assert {e["email"] for e in results["errors"]} == {"a@example.com", "bad", ""}

    def test_import_csv(self, admin_client):
        upload = SimpleUploadedFile(
            "emails.csv", b"Email\nx@example.com\ny@example.com\n", content_type="text/csv"
        )

        response = admin_client.post(
            reverse("licenses-import"), {"file": upload}, format="multipart"
        )

        assert response.status_code == 200
        assert response.json()["results"]["success"] == 2
        assert LicenseModel.objects.count() == 2

    def test_import_without_emails(self, admin_client):
        upload = SimpleUploadedFile("emails.csv", b"Email\n", content_type="text/csv")

        response = admin_client.post(
            reverse("licenses-import"), {"file": upload}, format="multipart"
        )

        assert response.status_code == 400

    def test_export_csv(self, admin_client):
        _create(admin_client, "a@example.com")

        response = admin_client.get(reverse("licenses-export"))

        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/csv")
        assert response["Content-Disposition"].startswith('attachment; filename="')
        lines = response.content.decode().splitlines()
        assert lines[0] == "Email,Status,Date Added,Activated At"
        assert lines[1].startswith("a@example.com,Pending,")
        assert lines[1].endswith(",N/A")

    def test_remove(self, admin_client):
        license_id = _create(admin_client, "a@example.com").json()["license"]["id"]

        response = admin_client.delete(reverse("license-detail", args=[license_id]))
        again = admin_client.delete(reverse("license-detail", args=[license_id]))

        assert response.status_code == 200
        assert again.status_code == 404
        assert again.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_resend(self, admin_client, mailoutbox):
        license_id = _create(admin_client, "a@example.com").json()["license"]["id"]

        response = admin_client.post(reverse("license-resend", args=[license_id]))

        assert response.status_code == 200
        assert response.json()["messageId"]
        assert len(mailoutbox) == 2

    def test_resend_unknown_license(self, admin_client):
        response = admin_client.post(reverse("license-resend", args=[uuid.uuid4()]))

        assert response.status_code == 404

    def test_update_email(self, admin_client, mailoutbox):
        license_id = _create(admin_client, "a@example.com").json()["license"]["id"]

        response = admin_client.patch(
            reverse("license-email", args=[license_id]), {"email": "z@example.com"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["license"]["email"] == "z@example.com"
        assert response.json()["emailSent"] is True
        assert mailoutbox[-1].to == ["z@example.com"]
        assert LicenseModel.objects.get(id=license_id).email == "z@example.com"

    def test_update_email_to_taken_address(self, admin_client):
        license_id = _create(admin_client, "a@example.com").json()["license"]["id"]
        _create(admin_client, "b@example.com")

        response = admin_client.patch(
            reverse("license-email", args=[license_id]), {"email": "b@example.com"}, format="json"
        )

        assert response.status_code == 409

    def test_email_status(self, admin_client):
        response = admin_client.post(
            reverse("licenses-email-status"), {"messageIds": ["m-1", "m-2"]}, format="json"
        )

        assert response.status_code == 200
        assert [s["messageId"] for s in response.json()["statuses"]] == ["m-1", "m-2"]
        assert response.json()["statuses"][0]["status"] == "sent"
