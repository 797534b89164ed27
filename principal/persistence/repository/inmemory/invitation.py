"""In-memory invitation repository for testing."""

from typing import Optional

from principal.domain.model.invitation import Invitation
from principal.domain.repository.invitation import InvitationRepository
from principal.domain.value import InvitationId, InvitationStatus, TenantId


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    async def find_pending(self, tenant_id: TenantId, email: str) -> Optional[Invitation]:
        """Find the newest pending invitation for an email in a tenant."""
        matches = [
            invitation
            for invitation in self._invitations.values()
            if invitation.tenant_id == tenant_id
            and invitation.email == email
            and invitation.status == InvitationStatus.PENDING
        ]
        if not matches:
            return None
        return max(matches, key=lambda invitation: invitation.created_at)

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update)."""
        self._invitations[invitation.id] = invitation
        return invitation
