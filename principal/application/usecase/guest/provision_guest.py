"""Provision guest use case.

Runs a registration through the validation gates in order and stops at the
first one that fails:

1. first and last name present
2. well-formed email
3. password confirmation, then password policy
4. open invitation for the email in the tenant
5. email and username unused in the tenant
6. create the user and assign its license (GuestUserService)
7. send the verification email
"""

from datetime import datetime, timezone
from uuid import UUID

import logfire
from pydantic import BaseModel

from principal.application.usecase.base import BaseUseCase
from principal.config import Settings
from principal.domain.service import (
    GuestUserService,
    InvitationService,
    VerificationEmailService,
)
from principal.domain.value import (
    CreateGuestResponseCode,
    DispatchVerificationResult,
    EmailAddress,
    ProvisionGuestUserReturnCode,
    TenantId,
)

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72

_PROVISION_FAILURES = {
    ProvisionGuestUserReturnCode.EMAIL_IS_NOT_UNIQUE: CreateGuestResponseCode.USER_EXISTS,
    ProvisionGuestUserReturnCode.USERNAME_IS_NOT_UNIQUE: CreateGuestResponseCode.USER_EXISTS,
}


class ProvisionGuestRequest(BaseModel):
    """Guest self-registration request."""

    tenant_id: UUID
    email: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    password: str | None = None
    password_confirmation: str | None = None
    invitation_token: str | None = None
    redirect_url: str | None = None


class ProvisionGuestResponse(BaseModel):
    """Guest registration outcome."""

    result_code: CreateGuestResponseCode
    user_id: str | None = None
    verification_dispatch: DispatchVerificationResult | None = None


def password_is_acceptable(password: str, min_length: int) -> bool:
    """Check a password against the guest password policy."""
    if len(password) < min_length:
        return False
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    return bool(password.strip())


class ProvisionGuestUseCase(BaseUseCase):
    """Use case for registering an invited guest."""

    def __init__(
        self,
        invitation_service: InvitationService,
        guest_user_service: GuestUserService,
        verification_email_service: VerificationEmailService,
        settings: Settings,
    ) -> None:
        """Initialize provision guest use case.

        Args:
            invitation_service: Invitation domain service
            guest_user_service: Guest user domain service
            verification_email_service: Verification dispatch domain service
            settings: Application settings
        """
        self.invitation_service = invitation_service
        self.guest_user_service = guest_user_service
        self.verification_email_service = verification_email_service
        self.settings = settings

    async def execute(self, request: ProvisionGuestRequest) -> ProvisionGuestResponse:
        """Register a guest.

        Args:
            request: Registration details

        Returns:
            Response with the result code and, when an account exists after
            the call, its user ID
        """
        with logfire.span(
            "provision_guest.execute",
            tenant_id=str(request.tenant_id),
            email=request.email,
        ):
            try:
                return await self._provision(request)
            except Exception as e:
                logfire.error(
                    "Guest provisioning failed",
                    tenant_id=str(request.tenant_id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return ProvisionGuestResponse(result_code=CreateGuestResponseCode.FAILED)

    async def _provision(self, request: ProvisionGuestRequest) -> ProvisionGuestResponse:
        tenant_id = TenantId(request.tenant_id)

        first_name = (request.first_name or "").strip()
        last_name = (request.last_name or "").strip()
        if not first_name or not last_name:
            return self._reject(CreateGuestResponseCode.FIRST_OR_LAST_NAME_IS_NULL)

        try:
            email = EmailAddress(request.email or "").root
        except ValueError:
            return self._reject(CreateGuestResponseCode.INVALID_EMAIL)

        password = request.password
        if not password or password != request.password_confirmation:
            return self._reject(CreateGuestResponseCode.PASSWORD_CONFIRMATION_ERROR)
        if not password_is_acceptable(password, self.settings.guest.password_min_length):
            return self._reject(CreateGuestResponseCode.INVALID_PASSWORD)

        username = (request.username or "").strip().lower() or email

        invitation = await self.invitation_service.find_valid_invitation(
            tenant_id, email, request.invitation_token, datetime.now(timezone.utc)
        )
        if invitation is None:
            return self._reject(CreateGuestResponseCode.USER_NOT_INVITED)

        if await self.guest_user_service.exists(tenant_id, email, username):
            return self._reject(CreateGuestResponseCode.USER_EXISTS)

        verification_required = self.settings.guest.email_verification_required
        code, user = await self.guest_user_service.provision_guest_user(
            tenant_id=tenant_id,
            email=email,
            username=username,
            first_name=first_name,
            last_name=last_name,
            password=password,
            license_type=self.settings.guest.default_license_type,
            email_verified=not verification_required,
        )
        if code != ProvisionGuestUserReturnCode.SUCCESS or user is None:
            return self._reject(
                _PROVISION_FAILURES.get(code, CreateGuestResponseCode.FAILED)
            )

        if not verification_required:
            logfire.info("Guest created without email verification", user_id=str(user.id))
            return ProvisionGuestResponse(
                result_code=CreateGuestResponseCode.SUCCESS, user_id=str(user.id)
            )

        dispatch = await self.verification_email_service.dispatch_verification(
            user.id, email, first_name, request.redirect_url
        )
        if dispatch != DispatchVerificationResult.SUCCESS:
            # The account stays licensed and unverified; the guest can ask
            # for a new email.
            logfire.error(
                "Sending guest verification email failed",
                user_id=str(user.id),
                dispatch=dispatch.value,
            )
            return ProvisionGuestResponse(
                result_code=CreateGuestResponseCode.FAILED,
                user_id=str(user.id),
                verification_dispatch=dispatch,
            )

        return ProvisionGuestResponse(
            result_code=CreateGuestResponseCode.SUCCESS_EMAIL_VERIFICATION_NEEDED,
            user_id=str(user.id),
            verification_dispatch=dispatch,
        )

    @staticmethod
    def _reject(code: CreateGuestResponseCode) -> ProvisionGuestResponse:
        logfire.info("Guest registration rejected", result_code=code.value)
        return ProvisionGuestResponse(result_code=code)
