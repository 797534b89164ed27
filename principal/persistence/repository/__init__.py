"""PostgreSQL repository implementations."""

from principal.persistence.repository.invitation import PostgresInvitationRepository
from principal.persistence.repository.license import (
    PostgresLicenseInventoryRepository,
)
from principal.persistence.repository.user import PostgresUserRepository
from principal.persistence.repository.verification_code import (
    PostgresVerificationCodeRepository,
)

__all__ = [
    "PostgresUserRepository",
    "PostgresInvitationRepository",
    "PostgresLicenseInventoryRepository",
    "PostgresVerificationCodeRepository",
]
