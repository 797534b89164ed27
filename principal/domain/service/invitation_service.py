"""Invitation domain service."""

import secrets
from datetime import datetime

import logfire

from principal.domain.model.invitation import Invitation
from principal.domain.repository import InvitationRepository
from principal.domain.value import TenantId

from .base import Service


class InvitationService(Service):
    """Domain service for checking guest invitations."""

    def __init__(self, invitation_repository: InvitationRepository) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
        """
        self.invitation_repository = invitation_repository

    async def find_valid_invitation(
        self,
        tenant_id: TenantId,
        email: str,
        token: str | None,
        now: datetime,
    ) -> Invitation | None:
        """Find an invitation that admits ``email`` into a tenant.

        Args:
            tenant_id: Tenant being joined
            email: Normalized invitee email
            token: Invitation token presented by the registrant, if any
            now: Reference time for expiry

        Returns:
            The invitation if it is pending, unexpired and its token (when
            both sides carry one) matches; None otherwise
        """
        with logfire.span(
            "invitation_service.find_valid_invitation",
            tenant_id=str(tenant_id),
            email=email,
        ):
            invitation = await self.invitation_repository.find_pending(
                tenant_id, email
            )
            if invitation is None:
                logfire.info("No pending invitation", tenant_id=str(tenant_id), email=email)
                return None

            if not invitation.is_open(now):
                logfire.info(
                    "Invitation expired",
                    invitation_id=str(invitation.id),
                    expires_at=invitation.expires_at.isoformat(),
                )
                return None

            if invitation.token and token:
                if not secrets.compare_digest(
                    invitation.token.encode("utf-8"), token.encode("utf-8")
                ):
                    logfire.warn(
                        "Invitation token mismatch", invitation_id=str(invitation.id)
                    )
                    return None

            return invitation
