"""Domain layer errors."""

from principal.domain.value import LicenseFailureReason, UserId


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UserAlreadyExistsError(BusinessRuleViolationError):
    """Raised by the user store when a create would break tenant uniqueness.

    ``field`` is ``"email"`` or ``"username"``.
    """

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"A user already exists with {field} = {value}")


class ConcurrencyConflictError(DomainError):
    """Raised when a conditional write lost against a concurrent writer."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} was modified concurrently")


class LicenseAssignmentFailedError(DomainError):
    """Raised when a license seat could not be bound to a user."""

    def __init__(self, message: str, user_id: UserId, reason: LicenseFailureReason):
        self.user_id = user_id
        self.reason = reason
        super().__init__(message)


class EmailDeliveryError(DomainError):
    """Raised by an email sender when a message could not be delivered."""

    pass
