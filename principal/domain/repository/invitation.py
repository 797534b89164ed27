"""Invitation repository interface."""

from abc import ABC, abstractmethod

from principal.domain.model.invitation import Invitation
from principal.domain.value import TenantId


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Provisioning only reads invitations; ``save`` exists for the
    collaborators that issue and close them.
    """

    @abstractmethod
    async def find_pending(self, tenant_id: TenantId, email: str) -> Invitation | None:
        """Find the pending invitation for an email in a tenant.

        Expiry is not checked here; callers compare ``expires_at``.

        Args:
            tenant_id: Tenant the invitation belongs to
            email: Normalized invitee email

        Returns:
            The pending invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: The invitation to save

        Returns:
            The saved invitation
        """
        pass
