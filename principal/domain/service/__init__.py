"""Domain services."""

from .base import Service
from .guest_user_service import GuestUserService
from .guest_verification_service import GuestVerificationService
from .invitation_service import InvitationService
from .license_service import LicenseService
from .super_admin_service import SuperAdminService
from .verification_email_service import EmailSender, VerificationEmailService

__all__ = [
    "EmailSender",
    "GuestUserService",
    "GuestVerificationService",
    "InvitationService",
    "LicenseService",
    "Service",
    "SuperAdminService",
    "VerificationEmailService",
]
