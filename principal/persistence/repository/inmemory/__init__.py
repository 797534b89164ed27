"""In-memory repository implementations for testing."""

from .invitation import InMemoryInvitationRepository
from .license import InMemoryLicenseInventoryRepository
from .user import InMemoryUserRepository
from .verification_code import InMemoryVerificationCodeRepository

__all__ = [
    "InMemoryInvitationRepository",
    "InMemoryLicenseInventoryRepository",
    "InMemoryUserRepository",
    "InMemoryVerificationCodeRepository",
]
