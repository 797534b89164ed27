"""Domain value objects for guest provisioning."""

from principal.domain.value.codes import (
    CreateGuestResponseCode,
    DispatchVerificationResult,
    ProvisionGuestUserReturnCode,
    SendVerificationEmailResponseCode,
    VerifyGuestResponseCode,
)
from principal.domain.value.identifiers import (
    SUPER_ADMIN_GROUP_ID,
    GroupId,
    InvitationId,
    TenantId,
    UserId,
    VerificationCodeId,
)
from principal.domain.value.types import (
    EmailAddress,
    InvitationStatus,
    LicenseFailureReason,
    LicenseReservationStatus,
    LicenseType,
    UserState,
    UserType,
)

__all__ = [
    # Identifiers
    "UserId",
    "TenantId",
    "GroupId",
    "InvitationId",
    "VerificationCodeId",
    "SUPER_ADMIN_GROUP_ID",
    # Types
    "EmailAddress",
    "InvitationStatus",
    "LicenseFailureReason",
    "LicenseReservationStatus",
    "LicenseType",
    "UserState",
    "UserType",
    # Result codes
    "CreateGuestResponseCode",
    "DispatchVerificationResult",
    "ProvisionGuestUserReturnCode",
    "SendVerificationEmailResponseCode",
    "VerifyGuestResponseCode",
]
