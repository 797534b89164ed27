"""Domain model entities for guest provisioning."""

from principal.domain.model.invitation import Invitation
from principal.domain.model.license import (
    LicenseAssignment,
    LicensePool,
    LicenseReservation,
)
from principal.domain.model.user import GuestUser
from principal.domain.model.verification_code import VerificationCode

__all__ = [
    "GuestUser",
    "Invitation",
    "LicenseAssignment",
    "LicensePool",
    "LicenseReservation",
    "VerificationCode",
]
