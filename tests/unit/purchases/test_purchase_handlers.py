"""
Unit tests for purchase handlers and the payment gateway adapter.
"""

import uuid
from unittest.mock import MagicMock, patch

import pytest
import requests

from core.domain.exceptions import (
    AdminNotFoundError,
    InvalidQuantityError,
    MissingPaymentSessionError,
    PaymentProviderError,
)
from core.domain.value_objects import TeamRole
from purchases.application.commands.complete_purchase import CompletePurchaseCommand
from purchases.application.commands.start_checkout import StartCheckoutCommand
from purchases.application.handlers.purchase_handlers import (
    CompletePurchaseHandler,
    StartCheckoutHandler,
    parse_license_count,
)
from purchases.infrastructure.payment_gateway import HttpPaymentGateway
from teams.domain.member import TeamMember
from teams.domain.team import Team


@pytest.fixture
def complete_handler(admin_repository, scope_resolver, quota_ledger, event_bus):
    return CompletePurchaseHandler(admin_repository, scope_resolver, quota_ledger, event_bus)


class TestParseLicenseCount:
    """Tests for parse_license_count."""

    @pytest.mark.parametrize("raw,expected", [(3, 3), ("7", 7), (" 12 ", 12)])
    def test_valid(self, raw, expected):
        assert parse_license_count(raw) == expected

    @pytest.mark.parametrize("raw", [0, -2, "abc", "", None, True, "2.5"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidQuantityError):
            parse_license_count(raw)


@pytest.mark.asyncio
class TestCompletePurchaseHandler:
    """Tests for CompletePurchaseHandler."""

    async def test_solo_purchase_credits_admin(
        self, complete_handler, admin_repository, team_admin, event_bus
    ):
        result = await complete_handler.handle(
            CompletePurchaseCommand(admin_id=team_admin.id, license_count="3", session_id="cs_1")
        )

        assert (result.licenses_added, result.total_licenses, result.replayed) == (3, 8, False)
        assert result.message == "License purchase completed successfully"
        assert (await admin_repository.find_by_id(team_admin.id)).purchased_license_count == 8
        assert event_bus.types() == ["PurchaseApplied"]
        assert event_bus.events[0].data()["licenses_added"] == 3

    async def test_team_purchase_credits_team(
        self, complete_handler, team_repository, member_repository, admin_repository, team_admin
    ):
        """Test a member's purchase goes to the team, not the admin."""
        team = await team_repository.save(
            Team.create("Acme", "acme.com", team_admin.id, purchased_license_count=5)
        )
        await member_repository.add(TeamMember.create(team.id, team_admin.id, TeamRole.OWNER))

        result = await complete_handler.handle(
            CompletePurchaseCommand(admin_id=team_admin.id, license_count=2, session_id="cs_2")
        )

        assert result.total_licenses == 7
        assert (await team_repository.find_by_id(team.id)).purchased_license_count == 7
        assert (await admin_repository.find_by_id(team_admin.id)).purchased_license_count == 5

    async def test_replayed_session_credits_once(
        self, complete_handler, admin_repository, team_admin, event_bus
    ):
        """Test the same payment session applied twice adds licenses once."""
        command = CompletePurchaseCommand(admin_id=team_admin.id, license_count=4, session_id="cs_3")

        await complete_handler.handle(command)
        replay = await complete_handler.handle(command)

        assert replay.replayed is True
        assert replay.total_licenses == 9
        assert replay.message == "License purchase was already applied"
        assert (await admin_repository.find_by_id(team_admin.id)).purchased_license_count == 9
        assert event_bus.types() == ["PurchaseApplied"]

    async def test_missing_session_id_is_rejected(
        self, complete_handler, admin_repository, team_admin, event_bus
    ):
        """Test a purchase without a payment session credits nothing."""
        for session_id in (None, "", "   "):
            with pytest.raises(MissingPaymentSessionError):
                await complete_handler.handle(
                    CompletePurchaseCommand(
                        admin_id=team_admin.id, license_count=1, session_id=session_id
                    )
                )

        assert (await admin_repository.find_by_id(team_admin.id)).purchased_license_count == 5
        assert event_bus.events == []

    async def test_invalid_count(self, complete_handler, team_admin):
        with pytest.raises(InvalidQuantityError):
            await complete_handler.handle(
                CompletePurchaseCommand(admin_id=team_admin.id, license_count="0")
            )

    async def test_unknown_admin(self, complete_handler):
        with pytest.raises(AdminNotFoundError):
            await complete_handler.handle(
                CompletePurchaseCommand(
                    admin_id=uuid.uuid4(), license_count=1, session_id="cs_9"
                )
            )


@pytest.mark.asyncio
class TestStartCheckoutHandler:
    """Tests for StartCheckoutHandler."""

    async def test_checkout_url(self, admin_repository, payment_gateway, team_admin):
        url = await StartCheckoutHandler(admin_repository, payment_gateway).handle(
            StartCheckoutCommand(admin_id=team_admin.id, license_count="5")
        )

        assert url == payment_gateway.url
        assert payment_gateway.calls == [("Alice Anders", "alice@acme.com", 5)]

    async def test_invalid_count_skips_provider(self, admin_repository, payment_gateway,
                                                team_admin):
        with pytest.raises(InvalidQuantityError):
            await StartCheckoutHandler(admin_repository, payment_gateway).handle(
                StartCheckoutCommand(admin_id=team_admin.id, license_count=-1)
            )
        assert payment_gateway.calls == []


def _response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.mark.asyncio
class TestHttpPaymentGateway:
    """Tests for HttpPaymentGateway."""

    async def test_posts_checkout_request(self):
        gateway = HttpPaymentGateway("https://pay.example.com/api/", "key-1", timeout=5)
        payload = {"data": {"url": "https://checkout.example.com/cs_1"}}

        with patch("purchases.infrastructure.payment_gateway.requests.post",
                   return_value=_response(payload)) as post:
            url = await gateway.create_checkout("Alice", "alice@acme.com", 3)

        assert url == "https://checkout.example.com/cs_1"
        post.assert_called_once_with(
            "https://pay.example.com/api/stripe/buy-licenses",
            json={"name": "Alice", "email": "alice@acme.com", "numberOfLicenses": 3},
            headers={"x-api-key": "key-1", "Content-Type": "application/json"},
            timeout=5,
        )

    async def test_missing_url(self):
        gateway = HttpPaymentGateway("https://pay.example.com/api", "key-1")

        with patch("purchases.infrastructure.payment_gateway.requests.post",
                   return_value=_response({"data": {}})):
            with pytest.raises(PaymentProviderError, match="No checkout URL"):
                await gateway.create_checkout("Alice", "alice@acme.com", 3)

    async def test_provider_error(self):
        gateway = HttpPaymentGateway("https://pay.example.com/api", "key-1")

        with patch("purchases.infrastructure.payment_gateway.requests.post",
                   side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(PaymentProviderError):
                await gateway.create_checkout("Alice", "alice@acme.com", 3)
