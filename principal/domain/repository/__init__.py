"""Repository interfaces for the guest provisioning domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from principal.domain.repository.invitation import InvitationRepository
from principal.domain.repository.license import LicenseInventoryRepository
from principal.domain.repository.user import UserRepository
from principal.domain.repository.verification_code import VerificationCodeRepository

__all__ = [
    "InvitationRepository",
    "LicenseInventoryRepository",
    "UserRepository",
    "VerificationCodeRepository",
]
