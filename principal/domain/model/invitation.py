"""Invitation entity.

An invitation is a tenant-scoped, time-boxed permission for one email
address to register as a guest. It is read-only to provisioning; accepting
or revoking invitations is handled elsewhere.
"""

from datetime import datetime, timezone

from pydantic import Field

from principal.domain.model.common import DomainModel
from principal.domain.value import InvitationId, InvitationStatus, TenantId


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - Only PENDING invitations that have not reached ``expires_at`` admit a guest
    - When both the invitation and the registration carry a token, they must match
    """

    id: InvitationId
    email: str
    tenant_id: TenantId
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    token: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def is_open(self, now: datetime) -> bool:
        """Whether the invitation still admits a registration at ``now``."""
        return self.status == InvitationStatus.PENDING and now < self.expires_at
