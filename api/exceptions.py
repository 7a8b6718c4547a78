"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AdminNotFoundError,
    AlreadyInTeamError,
    AlreadyMemberError,
    DomainException,
    DomainNotAllowedError,
    DuplicateInvitationError,
    DuplicateLicenseError,
    ForbiddenError,
    InvitationNotFoundError,
    LicenseNotFoundError,
    MemberNotFoundError,
    NotificationSendError,
    PaymentProviderError,
    PersistenceError,
    TeamNotFoundError,
)

logger = logging.getLogger(__name__)

NOT_FOUND_ERRORS = (
    AdminNotFoundError,
    LicenseNotFoundError,
    TeamNotFoundError,
    MemberNotFoundError,
    InvitationNotFoundError,
)
CONFLICT_ERRORS = (
    DuplicateLicenseError,
    AlreadyInTeamError,
    AlreadyMemberError,
    DuplicateInvitationError,
)
FORBIDDEN_ERRORS = (ForbiddenError, DomainNotAllowedError)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    if isinstance(exc, DRFValidationError):
        response = Response(
            {"error": {"code": "VALIDATION_ERROR", "message": _first_error(exc.detail)}},
            status=status.HTTP_400_BAD_REQUEST,
        )
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        if response:
            code = (
                exc.default_code.upper().replace("-", "_")
                if hasattr(exc, "default_code")
                else "API_ERROR"
            )
            response.data = {
                "error": {"code": code, "message": response.data.get("detail", exc.default_detail)}
            }
            if trace_id:
                response["X-Trace-ID"] = trace_id
            return response

    if isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    return _handle_unexpected_exception(exc, context, trace_id)


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)


def _first_error(detail) -> str:
    """Flatten DRF validation detail to its first message."""
    if isinstance(detail, dict):
        field, errors = next(iter(detail.items()), ("", ""))
        message = _first_error(errors)
        return message if field == "non_field_errors" else f"{field}: {message}"
    if isinstance(detail, list):
        return _first_error(detail[0]) if detail else "Invalid input"
    return str(detail)


def status_for(exc: DomainException) -> int:
    """HTTP status for a domain exception."""
    if isinstance(exc, NOT_FOUND_ERRORS):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, FORBIDDEN_ERRORS):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, CONFLICT_ERRORS):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, PaymentProviderError):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, (PersistenceError, NotificationSendError)):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            "Dependency failure: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id}
        )
    else:
        logger.warning(
            "Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id}
        )
    return Response({"error": {"code": exc.code, "message": exc.message}}, status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    response = exception_handler(exc, context)
    if not response:
        response = Response(
            {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    else:
        response.data = {
            "error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}
        }
    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response
