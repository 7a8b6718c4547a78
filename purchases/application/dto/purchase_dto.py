"""
Purchase DTOs for API responses.
"""

from dataclasses import dataclass


@dataclass
class PurchaseResultDTO:
    """Outcome of a completed purchase."""

    licenses_added: int
    total_licenses: int
    session_id: str
    replayed: bool = False

    @property
    def message(self) -> str:
        if self.replayed:
            return "License purchase was already applied"
        return "License purchase completed successfully"
