"""Result codes returned across the service boundary.

Enum values keep the spellings published to existing clients, including
``SucessEmailVerificationNeeded``.
"""

from enum import Enum


class CreateGuestResponseCode(str, Enum):
    """Outcome of a guest self-registration."""

    FAILED = "Failed"
    UNAUTHORIZED = "Unauthorized"
    FIRST_OR_LAST_NAME_IS_NULL = "FirstOrLastNameIsNull"
    EMAIL_IS_NOT_UNIQUE = "EmailIsNotUnique"
    INVALID_EMAIL = "InvalidEmail"
    USER_EXISTS = "UserExists"
    USER_NOT_INVITED = "UserNotInvited"
    USERNAME_IS_NOT_UNIQUE = "UsernameIsNotUnique"
    INVALID_PASSWORD = "InvalidPassword"
    PASSWORD_CONFIRMATION_ERROR = "PasswordConfirmationError"
    SUCCESS_EMAIL_VERIFICATION_NEEDED = "SucessEmailVerificationNeeded"
    SUCCESS = "Success"


class ProvisionGuestUserReturnCode(str, Enum):
    """Outcome of creating and licensing the guest record."""

    SUCCESS = "Success"
    SUCCESS_EMAIL_VERIFICATION_NEEDED = "SucessEmailVerificationNeeded"
    FAILED = "Failed"
    EMAIL_IS_NOT_UNIQUE = "EmailIsNotUnique"
    USERNAME_IS_NOT_UNIQUE = "UsernameIsNotUnique"


class VerifyGuestResponseCode(str, Enum):
    """Outcome of a verification code submission."""

    SUCCESS = "Success"
    SUCCESS_NO_USER = "SuccessNoUser"
    EMAIL_VERIFICATION_NEEDED = "EmailVerificationNeeded"
    INVALID_CODE = "InvalidCode"
    INVALID_NOT_GUEST = "InvalidNotGuest"
    INVALID_EMAIL = "InvalidEmail"
    USER_IS_LOCKED = "UserIsLocked"
    FAILED = "Failed"


class DispatchVerificationResult(str, Enum):
    """Outcome of issuing and sending a verification code.

    EMAIL_SEND_FAILED means the code is stored and the user can retry;
    PERSISTENCE_FAILED means the account state is unknown.
    """

    SUCCESS = "Success"
    EMAIL_SEND_FAILED = "EmailSendFailed"
    PERSISTENCE_FAILED = "PersistenceFailed"


class SendVerificationEmailResponseCode(str, Enum):
    """Outcome of a request to resend the verification email."""

    SUCCESS = "Success"
    INVALID_EMAIL = "InvalidEmail"
    USER_NOT_FOUND = "UserNotFound"
    USER_IS_LOCKED = "UserIsLocked"
    EMAIL_ALREADY_VERIFIED = "EmailAlreadyVerified"
    EMAIL_RECENTLY_SENT = "EmailRecentlySent"
    EMAIL_SEND_FAILED = "EmailSendFailed"
    FAILED = "Failed"
