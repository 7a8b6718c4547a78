"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ForbiddenError(DomainException):
    """Raised when an authenticated admin may not perform an action."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message, code="FORBIDDEN")


class ValidationError(DomainException):
    """Raised when input fails a field-level rule."""

    def __init__(self, message: str = "Invalid input", code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class InvalidEmailError(ValidationError):
    """Raised when an email address is malformed."""

    def __init__(self, message: str = "Valid email address is required"):
        super().__init__(message, code="INVALID_EMAIL")


class InvalidQuantityError(ValidationError):
    """Raised when a license count is not a positive integer."""

    def __init__(self, message: str = "Invalid license count"):
        super().__init__(message, code="INVALID_QUANTITY")


class InvalidRoleError(ValidationError):
    """Raised when a team role is not assignable."""

    def __init__(self, message: str = "Invalid role"):
        super().__init__(message, code="INVALID_ROLE")


class MissingPaymentSessionError(ValidationError):
    """Raised when a purchase arrives without a payment session id."""

    def __init__(self, message: str = "Payment session id is required"):
        super().__init__(message, code="MISSING_SESSION_ID")


class PersistenceError(DomainException):
    """Raised when the data store rejects a write."""

    def __init__(self, message: str = "Failed to save record"):
        super().__init__(message, code="PERSISTENCE_FAILURE")


class AdminNotFoundError(DomainException):
    """Raised when an admin profile is not found."""

    def __init__(self, message: str = "Admin not found"):
        super().__init__(message, code="ADMIN_NOT_FOUND")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class DuplicateLicenseError(LicenseException):
    """Raised when a license already exists for an email in the scope."""

    def __init__(self, message: str = "A license for this email already exists"):
        super().__init__(message, code="DUPLICATE_LICENSE")


class LicenseAlreadyActivatedError(LicenseException):
    """Raised when an operation requires a pending license."""

    def __init__(self, message: str = "License has already been activated"):
        super().__init__(message, code="ALREADY_ACTIVATED")


class QuotaExceededError(LicenseException):
    """Raised when a scope has fewer available licenses than requested."""

    def __init__(self, available: int = 0, requested: int = 1, message: str = None):
        self.available = available
        self.requested = requested
        if message is None:
            if available <= 0:
                message = "No available licenses. Please purchase more licenses."
            else:
                message = (
                    f"Only {available} license(s) available. "
                    f"You're trying to add {requested}."
                )
        super().__init__(message, code="QUOTA_EXCEEDED")


class NotificationSendError(DomainException):
    """Raised when a notification could not be delivered."""

    def __init__(self, message: str = "Failed to send email"):
        super().__init__(message, code="SEND_FAILURE")


class TeamException(DomainException):
    """Base exception for team-related errors."""

    pass


class TeamNotFoundError(TeamException):
    """Raised when a team is not found."""

    def __init__(self, message: str = "Team not found"):
        super().__init__(message, code="TEAM_NOT_FOUND")


class MemberNotFoundError(TeamException):
    """Raised when a team member is not found."""

    def __init__(self, message: str = "Team member not found"):
        super().__init__(message, code="MEMBER_NOT_FOUND")


class InvitationNotFoundError(TeamException):
    """Raised when an invitation is not found."""

    def __init__(self, message: str = "Invitation not found"):
        super().__init__(message, code="INVITATION_NOT_FOUND")


class AlreadyInTeamError(TeamException):
    """Raised when an admin already belongs to a team."""

    def __init__(self, message: str = "You are already a member of a team"):
        super().__init__(message, code="ALREADY_IN_TEAM")


class DomainNotAllowedError(TeamException):
    """Raised when an email domain may not create teams."""

    def __init__(self, message: str = "Your email domain is not allowed to create teams"):
        super().__init__(message, code="DOMAIN_NOT_ALLOWED")


class DomainMismatchError(TeamException):
    """Raised when an invited email is outside the team domain."""

    def __init__(self, message: str = "Email domain does not match the team domain"):
        super().__init__(message, code="DOMAIN_MISMATCH")


class AlreadyMemberError(TeamException):
    """Raised when the invited email already belongs to a team member."""

    def __init__(self, message: str = "This user is already a team member"):
        super().__init__(message, code="ALREADY_MEMBER")


class DuplicateInvitationError(TeamException):
    """Raised when a pending invitation already exists for the email."""

    def __init__(self, message: str = "An invitation is already pending for this email"):
        super().__init__(message, code="DUPLICATE_INVITATION")


class InvalidInvitationStateError(TeamException):
    """Raised when an invitation transition is not allowed from its status."""

    def __init__(self, message: str = "Invitation is no longer pending"):
        super().__init__(message, code="INVALID_INVITATION_STATE")


class CannotDemoteOwnerError(TeamException):
    """Raised when a role change targets the owner row."""

    def __init__(self, message: str = "The team owner's role cannot be changed"):
        super().__init__(message, code="CANNOT_DEMOTE_OWNER")


class CannotRemoveOwnerError(TeamException):
    """Raised when removal targets the team owner."""

    def __init__(self, message: str = "The team owner cannot be removed"):
        super().__init__(message, code="CANNOT_REMOVE_OWNER")


class PaymentProviderError(DomainException):
    """Raised when the payment provider call fails."""

    def __init__(self, message: str = "Failed to initiate purchase"):
        super().__init__(message, code="PAYMENT_PROVIDER_ERROR")
