"""
Admin session authentication middleware.

This middleware maps the logged-in Django user to an Admin profile for the
console API and rejects users without the admin role claim.
"""

import logging
from typing import Optional

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from admins.infrastructure.models import Admin as AdminModel
from admins.infrastructure.repositories.django_admin_repository import DjangoAdminRepository

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1/"

# Payment redirects land here from the provider; the view answers with a
# dashboard redirect instead of a JSON error.
AUTH_OPTIONAL_PATHS = ("/api/v1/purchases/complete",)


class AdminAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for admin authentication.

    This middleware:
    1. Requires an authenticated session for console APIs (/api/v1/*)
    2. Resolves the Admin profile of the session user
    3. Returns 401 without a session and 403 without an admin profile
    4. Stores the Admin domain entity on ``request.admin``
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401/403 if authentication fails, None otherwise
        """
        request.admin = None  # type: ignore

        if not request.path.startswith(API_PREFIX):
            return None

        optional = request.path.rstrip("/") in AUTH_OPTIONAL_PATHS and request.method == "GET"

        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            if optional:
                return None
            return self._error(401, "UNAUTHORIZED", "Unauthorized. Please login.")

        profile = AdminModel.objects.filter(user_id=user.pk).first()
        if profile is None or profile.role != "admin":
            if optional:
                return None
            logger.warning(
                "Console access denied",
                extra={"user_id": user.pk, "has_profile": profile is not None},
            )
            return self._error(403, "FORBIDDEN", "Access denied. Admin account required.")

        request.admin = DjangoAdminRepository.to_domain(profile)  # type: ignore
        return None

    @staticmethod
    def _error(status_code: int, code: str, message: str) -> JsonResponse:
        return JsonResponse({"error": {"code": code, "message": message}}, status=status_code)
