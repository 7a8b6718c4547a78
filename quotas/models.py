"""Model registration for the quotas app."""
from quotas.infrastructure.models import PurchaseReconciliation  # noqa: F401
