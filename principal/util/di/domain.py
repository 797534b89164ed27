"""Domain layer DI providers."""

from datetime import timedelta

from dishka import Scope, provide

from principal.config import GuestSettings, VerificationSettings
from principal.domain.repository import (
    InvitationRepository,
    LicenseInventoryRepository,
    UserRepository,
    VerificationCodeRepository,
)
from principal.domain.service import (
    EmailSender,
    GuestUserService,
    GuestVerificationService,
    InvitationService,
    LicenseService,
    SuperAdminService,
    VerificationEmailService,
)
from principal.domain.value import GroupId
from principal.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_license_service(
        self, license_repository: LicenseInventoryRepository
    ) -> LicenseService:
        """Provide license assignment domain service."""
        return LicenseService(license_repository=license_repository)

    @provide
    def get_super_admin_service(
        self, user_repository: UserRepository
    ) -> SuperAdminService:
        """Provide super-admin authorization domain service."""
        return SuperAdminService(user_repository=user_repository)

    @provide
    def get_invitation_service(
        self, invitation_repository: InvitationRepository
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(invitation_repository=invitation_repository)

    @provide
    def get_guest_user_service(
        self,
        user_repository: UserRepository,
        license_service: LicenseService,
        guest_settings: GuestSettings,
    ) -> GuestUserService:
        """Provide guest user domain service."""
        return GuestUserService(
            user_repository=user_repository,
            license_service=license_service,
            bcrypt_rounds=guest_settings.bcrypt_rounds,
            default_group_ids=(
                frozenset({GroupId(guest_settings.default_group_id)})
                if guest_settings.default_group_id
                else frozenset()
            ),
        )

    @provide
    def get_verification_email_service(
        self,
        verification_code_repository: VerificationCodeRepository,
        email_sender: EmailSender,
        verification_settings: VerificationSettings,
    ) -> VerificationEmailService:
        """Provide verification dispatch domain service."""
        return VerificationEmailService(
            verification_code_repository=verification_code_repository,
            email_sender=email_sender,
            code_ttl=timedelta(minutes=verification_settings.code_ttl_minutes),
            code_bytes=verification_settings.code_bytes,
        )

    @provide
    def get_guest_verification_service(
        self,
        user_repository: UserRepository,
        verification_code_repository: VerificationCodeRepository,
        verification_settings: VerificationSettings,
    ) -> GuestVerificationService:
        """Provide guest verification domain service."""
        return GuestVerificationService(
            user_repository=user_repository,
            verification_code_repository=verification_code_repository,
            max_failed_attempts=verification_settings.max_failed_attempts,
            max_conflict_retries=verification_settings.max_conflict_retries,
        )
