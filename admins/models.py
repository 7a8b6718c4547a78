"""Model registration for the admins app."""
from admins.infrastructure.models import Admin  # noqa: F401
