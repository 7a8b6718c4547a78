"""
License DTOs for API responses.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from licenses.domain.license import License
from notifications.ports.email_sender import SendResult


@dataclass
class CreateLicenseResult:
    """Result of creating one license."""

    license: License
    notification: SendResult

    @property
    def email_sent(self) -> bool:
        return self.notification.success


@dataclass
class BatchError:
    """Per-email failure inside a batch."""

    email: str
    reason: str


@dataclass
class BatchResult:
    """Aggregated outcome of a batch create or import."""

    success: int = 0
    failed: int = 0
    emails_sent: int = 0
    emails_failed: int = 0
    errors: List[BatchError] = field(default_factory=list)
    licenses: List[License] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return self.success + self.failed

    @property
    def message(self) -> str:
        return (
            f"Processed {self.processed} emails: {self.success} licenses added, "
            f"{self.emails_sent} emails sent, {self.failed} failed"
        )


@dataclass
class UpdateEmailResult:
    """Result of moving a license to another email."""

    license: License
    notification: SendResult

    @property
    def email_sent(self) -> bool:
        return self.notification.success


@dataclass
class LicenseStatistics:
    """
    License counts of a scope.

    ``available`` is None for an unlimited scope.
    """

    purchased: int
    assigned: int
    activated: int
    pending: int
    available: Optional[int]


@dataclass
class LicenseListResult:
    """Licenses of a scope with their statistics."""

    licenses: List[License]
    statistics: LicenseStatistics


@dataclass
class ExportRow:
    """One row of the license export table."""

    email: str
    status: str
    date_added: str
    activated_at: str
