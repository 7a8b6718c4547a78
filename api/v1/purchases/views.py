"""
Purchase API views.

These endpoints are used by the admin dashboard and the payment provider to:
- Start a checkout for more licenses
- Credit a confirmed purchase to the admin's scope
"""

import logging
from urllib.parse import urlencode

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import HttpResponseRedirect
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1 import providers
from api.v1.purchases.serializers import (
    CheckoutResponseSerializer,
    CompletePurchaseRequestSerializer,
    PurchaseResultSerializer,
    StartCheckoutRequestSerializer,
)
from core.domain.exceptions import (
    AdminNotFoundError,
    InvalidQuantityError,
    PersistenceError,
)
from purchases.application.commands.complete_purchase import CompletePurchaseCommand
from purchases.application.commands.start_checkout import StartCheckoutCommand

logger = logging.getLogger(__name__)

IDEMPOTENCY_HEADER = "HTTP_IDEMPOTENCY_KEY"


def dashboard_redirect(**params) -> HttpResponseRedirect:
    """Redirect to the dashboard with outcome query parameters."""
    return HttpResponseRedirect(f"{settings.DASHBOARD_URL}?{urlencode(params)}")


class StartCheckoutView(APIView):
    """View for starting a license checkout."""

    @extend_schema(
        operation_id="start_checkout",
        summary="Start Checkout",
        description="Create a payment checkout for licenseCount licenses.",
        tags=["Purchases"],
        request=StartCheckoutRequestSerializer,
        responses={
            200: CheckoutResponseSerializer,
            400: OpenApiResponse(description="Invalid license count"),
            502: OpenApiResponse(description="Payment provider error"),
        },
    )
    def post(self, request: Request) -> Response:
        """Start a checkout."""
        return async_to_sync(self._handle_checkout)(request)

    async def _handle_checkout(self, request: Request) -> Response:
        serializer = StartCheckoutRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        url = await providers.start_checkout_handler().handle(
            StartCheckoutCommand(
                admin_id=request.admin.id,
                license_count=serializer.validated_data["licenseCount"],
            )
        )
        return Response({"checkoutUrl": url}, status=status.HTTP_200_OK)


class CompletePurchaseView(APIView):
    """View for crediting a confirmed purchase."""

    @extend_schema(
        operation_id="complete_purchase",
        summary="Complete Purchase",
        description=(
            "Credit purchased licenses to the admin's team, or to the admin when solo. "
            "A repeated sessionId (or Idempotency-Key header) is credited once; "
            "one of them is required."
        ),
        tags=["Purchases"],
        request=CompletePurchaseRequestSerializer,
        responses={
            200: PurchaseResultSerializer,
            400: OpenApiResponse(description="Invalid license count or missing session id"),
            401: OpenApiResponse(description="Unauthorized - Login required"),
        },
    )
    def post(self, request: Request) -> Response:
        """Complete a purchase."""
        return async_to_sync(self._handle_complete)(request)

    async def _handle_complete(self, request: Request) -> Response:
        serializer = CompletePurchaseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        session_id = serializer.validated_data.get("sessionId") or request.META.get(
            IDEMPOTENCY_HEADER
        )
        result = await providers.complete_purchase_handler().handle(
            CompletePurchaseCommand(
                admin_id=request.admin.id,
                license_count=serializer.validated_data["licenseCount"],
                session_id=session_id or None,
            )
        )
        return Response(PurchaseResultSerializer(result).data, status=status.HTTP_200_OK)


class PurchaseRedirectView(APIView):
    """View the payment provider redirects the buyer to."""

    @extend_schema(
        operation_id="complete_purchase_redirect",
        summary="Complete Purchase (Redirect)",
        description=(
            "Landing endpoint after payment. Credits the purchase and redirects to "
            "the dashboard with success or error query parameters."
        ),
        tags=["Purchases"],
        parameters=[
            OpenApiParameter("licenseCount", str, OpenApiParameter.QUERY),
            OpenApiParameter("payment", str, OpenApiParameter.QUERY),
            OpenApiParameter("paymentType", str, OpenApiParameter.QUERY),
            OpenApiParameter("session_id", str, OpenApiParameter.QUERY, required=True),
        ],
        responses={302: OpenApiResponse(description="Redirect to the dashboard")},
    )
    def get(self, request: Request) -> HttpResponseRedirect:
        """Apply the purchase and redirect."""
        return async_to_sync(self._handle_redirect)(request)

    async def _handle_redirect(self, request: Request) -> HttpResponseRedirect:
        params = request.query_params
        if params.get("payment") != "successful" or params.get("paymentType") != "license_purchase":
            return dashboard_redirect(error="payment_failed")

        admin = getattr(request, "admin", None)
        if admin is None:
            return dashboard_redirect(error="admin_not_found")

        session_id = (params.get("session_id") or "").strip()
        if not session_id:
            logger.warning("Purchase redirect without session id", extra={"admin_id": str(admin.id)})
            return dashboard_redirect(error="payment_failed")

        try:
            result = await providers.complete_purchase_handler().handle(
                CompletePurchaseCommand(
                    admin_id=admin.id,
                    license_count=params.get("licenseCount"),
                    session_id=session_id,
                )
            )
        except InvalidQuantityError:
            return dashboard_redirect(error="invalid_license_count")
        except AdminNotFoundError:
            return dashboard_redirect(error="admin_not_found")
        except PersistenceError:
            logger.error("Purchase could not be applied", exc_info=True)
            return dashboard_redirect(error="update_failed")
        except Exception:  # pylint: disable=broad-exception-caught
            logger.error("Unexpected purchase redirect failure", exc_info=True)
            return dashboard_redirect(error="unexpected_error")

        return dashboard_redirect(
            success="purchase_complete",
            licenses_added=result.licenses_added,
            total_licenses=result.total_licenses,
        )
