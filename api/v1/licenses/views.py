"""
License API views.

These endpoints are used by the admin dashboard to:
- Assign licenses to emails, one at a time or in batches
- Remove licenses and correct pending emails
- Resend activation emails and check their delivery
- Import and export the license list as CSV
"""

import uuid

from asgiref.sync import async_to_sync
from django.http import HttpResponse
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1 import providers
from api.v1.licenses.serializers import (
    BatchResponseSerializer,
    CreateLicenseRequestSerializer,
    CreateLicenseResponseSerializer,
    CreateLicensesBatchRequestSerializer,
    DeliveryStatusSerializer,
    EmailStatusRequestSerializer,
    ImportLicensesRequestSerializer,
    LicenseListResponseSerializer,
    LicenseStatisticsSerializer,
    UpdateLicenseEmailRequestSerializer,
    UpdateLicenseEmailResponseSerializer,
)
from api.v1.licenses.tables import export_filename, parse_upload, render_export
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.create_licenses_batch import CreateLicensesBatchCommand
from licenses.application.commands.import_licenses import ImportLicensesCommand
from licenses.application.commands.remove_license import RemoveLicenseCommand
from licenses.application.commands.resend_activation import ResendActivationCommand
from licenses.application.commands.update_license_email import UpdateLicenseEmailCommand
from licenses.application.handlers.create_license_handler import (
    CreateLicenseHandler,
    CreateLicensesBatchHandler,
)
from licenses.application.handlers.license_management_handlers import (
    RemoveLicenseHandler,
    ResendActivationHandler,
    UpdateLicenseEmailHandler,
)
from licenses.application.handlers.license_query_handlers import (
    ExportLicensesHandler,
    GetEmailStatusesHandler,
    GetLicenseStatisticsHandler,
    ListLicensesHandler,
)
from licenses.application.queries.export_licenses import ExportLicensesQuery
from licenses.application.queries.get_email_statuses import GetEmailStatusesQuery
from licenses.application.queries.get_license_statistics import GetLicenseStatisticsQuery
from licenses.application.queries.list_licenses import ListLicensesQuery

ERROR_RESPONSES = {
    400: OpenApiResponse(description="Bad Request"),
    401: OpenApiResponse(description="Unauthorized - Login required"),
    403: OpenApiResponse(description="Forbidden - Admin account required"),
}


class LicenseCollectionView(APIView):
    """View for listing and creating licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="List the licenses of the admin's scope, newest first, with statistics.",
        tags=["Licenses"],
        responses={200: LicenseListResponseSerializer, **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        handler = providers.license_handler(ListLicensesHandler)
        result = await handler.handle(ListLicensesQuery(admin_id=request.admin.id))
        return Response(LicenseListResponseSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="create_license",
        summary="Create License",
        description=(
            "Assign a license to an email and send the activation email. "
            "A failed send is reported in emailSent; the license is kept."
        ),
        tags=["Licenses"],
        request=CreateLicenseRequestSerializer,
        responses={
            201: CreateLicenseResponseSerializer,
            409: OpenApiResponse(description="License already exists for this email"),
            **ERROR_RESPONSES,
        },
    )
    def post(self, request: Request) -> Response:
        """Create a license."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        serializer = CreateLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = providers.license_handler(CreateLicenseHandler)
        result = await handler.handle(
            CreateLicenseCommand(
                admin_id=request.admin.id,
                email=serializer.validated_data["email"],
            )
        )
        return Response(
            CreateLicenseResponseSerializer(result).data, status=status.HTTP_201_CREATED
        )


class LicenseBatchView(APIView):
    """View for creating licenses for several emails."""

    @extend_schema(
        operation_id="create_licenses_batch",
        summary="Create Licenses in Batch",
        description=(
            "Assign licenses to a list of emails. The whole batch is rejected when the "
            "scope cannot take every email; otherwise failures are reported per email."
        ),
        tags=["Licenses"],
        request=CreateLicensesBatchRequestSerializer,
        responses={200: BatchResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Create licenses for a list of emails."""
        return async_to_sync(self._handle_batch)(request)

    async def _handle_batch(self, request: Request) -> Response:
        serializer = CreateLicensesBatchRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = providers.license_handler(CreateLicensesBatchHandler)
        result = await handler.handle(
            CreateLicensesBatchCommand(
                admin_id=request.admin.id,
                emails=serializer.validated_data["emails"],
            )
        )
        return Response(BatchResponseSerializer(result).data, status=status.HTTP_200_OK)


class LicenseStatsView(APIView):
    """View for license statistics."""

    @extend_schema(
        operation_id="get_license_statistics",
        summary="License Statistics",
        description="Purchased, assigned, activated, pending and available counts.",
        tags=["Licenses"],
        responses={200: LicenseStatisticsSerializer, **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """Get license statistics."""
        return async_to_sync(self._handle_stats)(request)

    async def _handle_stats(self, request: Request) -> Response:
        handler = providers.license_handler(GetLicenseStatisticsHandler)
        stats = await handler.handle(GetLicenseStatisticsQuery(admin_id=request.admin.id))
        return Response(LicenseStatisticsSerializer(stats).data, status=status.HTTP_200_OK)


class LicenseImportView(APIView):
    """View for importing licenses from a CSV upload."""

    parser_classes = [MultiPartParser]

    @extend_schema(
        operation_id="import_licenses",
        summary="Import Licenses from CSV",
        description=(
            "Create licenses from the first column of an uploaded CSV file. "
            "The first row is treated as a header."
        ),
        tags=["Licenses"],
        request={"multipart/form-data": ImportLicensesRequestSerializer},
        responses={200: BatchResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Import licenses."""
        return async_to_sync(self._handle_import)(request)

    async def _handle_import(self, request: Request) -> Response:
        serializer = ImportLicensesRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        rows = parse_upload(serializer.validated_data["file"])
        result = await providers.import_handler().handle(
            ImportLicensesCommand(admin_id=request.admin.id, rows=rows)
        )
        return Response(BatchResponseSerializer(result).data, status=status.HTTP_200_OK)


class LicenseExportView(APIView):
    """View for exporting licenses as CSV."""

    @extend_schema(
        operation_id="export_licenses",
        summary="Export Licenses as CSV",
        description="Download the license list as a CSV attachment.",
        tags=["Licenses"],
        responses={(200, "text/csv"): str, **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> HttpResponse:
        """Export licenses."""
        return async_to_sync(self._handle_export)(request)

    async def _handle_export(self, request: Request) -> HttpResponse:
        handler = providers.license_handler(ExportLicensesHandler)
        rows = await handler.handle(ExportLicensesQuery(admin_id=request.admin.id))

        response = HttpResponse(render_export(rows), content_type="text/csv")
        response["Content-Disposition"] = f'attachment; filename="{export_filename()}"'
        return response


class LicenseEmailStatusView(APIView):
    """View for checking delivery of activation emails."""

    @extend_schema(
        operation_id="get_email_statuses",
        summary="Email Delivery Statuses",
        description="Look up delivery status of sent emails by provider message id.",
        tags=["Licenses"],
        request=EmailStatusRequestSerializer,
        responses={200: DeliveryStatusSerializer(many=True), **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Get delivery statuses."""
        return async_to_sync(self._handle_statuses)(request)

    async def _handle_statuses(self, request: Request) -> Response:
        serializer = EmailStatusRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = providers.license_handler(GetEmailStatusesHandler)
        statuses = await handler.handle(
            GetEmailStatusesQuery(
                admin_id=request.admin.id,
                message_ids=serializer.validated_data["messageIds"],
            )
        )
        return Response(
            {"statuses": DeliveryStatusSerializer(statuses, many=True).data},
            status=status.HTTP_200_OK,
        )


class LicenseDetailView(APIView):
    """View for removing a license."""

    @extend_schema(
        operation_id="remove_license",
        summary="Remove License",
        description="Delete a license of the admin's scope, activated or not.",
        tags=["Licenses"],
        responses={
            200: OpenApiResponse(description="License removed successfully"),
            404: OpenApiResponse(description="License not found"),
            **ERROR_RESPONSES,
        },
    )
    def delete(self, request: Request, license_id: uuid.UUID) -> Response:
        """Remove a license."""
        return async_to_sync(self._handle_remove)(request, license_id)

    async def _handle_remove(self, request: Request, license_id: uuid.UUID) -> Response:
        handler = providers.license_handler(RemoveLicenseHandler)
        await handler.handle(RemoveLicenseCommand(admin_id=request.admin.id, license_id=license_id))
        return Response({"message": "License removed successfully"}, status=status.HTTP_200_OK)


class LicenseResendView(APIView):
    """View for resending the activation email."""

    @extend_schema(
        operation_id="resend_activation",
        summary="Resend Activation Email",
        description="Send the activation email of a pending license again.",
        tags=["Licenses"],
        request=None,
        responses={
            200: OpenApiResponse(description="Activation email resent"),
            404: OpenApiResponse(description="License not found"),
            500: OpenApiResponse(description="Email could not be sent"),
            **ERROR_RESPONSES,
        },
    )
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        """Resend the activation email."""
        return async_to_sync(self._handle_resend)(request, license_id)

    async def _handle_resend(self, request: Request, license_id: uuid.UUID) -> Response:
        handler = providers.license_handler(ResendActivationHandler)
        result = await handler.handle(
            ResendActivationCommand(admin_id=request.admin.id, license_id=license_id)
        )
        return Response(
            {"message": "Activation email resent successfully", "messageId": result.message_id},
            status=status.HTTP_200_OK,
        )


class LicenseEmailView(APIView):
    """View for changing the email of a pending license."""

    @extend_schema(
        operation_id="update_license_email",
        summary="Update License Email",
        description=(
            "Move a pending license to another email and send the activation email "
            "to the new address."
        ),
        tags=["Licenses"],
        request=UpdateLicenseEmailRequestSerializer,
        responses={
            200: UpdateLicenseEmailResponseSerializer,
            404: OpenApiResponse(description="License not found"),
            409: OpenApiResponse(description="License already exists for this email"),
            **ERROR_RESPONSES,
        },
    )
    def patch(self, request: Request, license_id: uuid.UUID) -> Response:
        """Update the license email."""
        return async_to_sync(self._handle_update_email)(request, license_id)

    async def _handle_update_email(self, request: Request, license_id: uuid.UUID) -> Response:
        serializer = UpdateLicenseEmailRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = providers.license_handler(UpdateLicenseEmailHandler)
        result = await handler.handle(
            UpdateLicenseEmailCommand(
                admin_id=request.admin.id,
                license_id=license_id,
                email=serializer.validated_data["email"],
            )
        )
        return Response(
            UpdateLicenseEmailResponseSerializer(result).data, status=status.HTTP_200_OK
        )
