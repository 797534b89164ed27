"""PostgreSQL implementation of Invitation repository."""

from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from principal.domain.model import Invitation
from principal.domain.repository import InvitationRepository
from principal.domain.value import InvitationId, InvitationStatus, TenantId
from principal.persistence.mappers import invitation_to_dict, row_to_invitation
from principal.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_pending(self, tenant_id: TenantId, email: str) -> Optional[Invitation]:
        """Find the newest pending invitation for an email in a tenant.

        Args:
            tenant_id: Tenant the invitation belongs to
            email: Normalized invitee email

        Returns:
            Invitation if found, None otherwise
        """
        stmt = (
            select(invitations_table)
            .where(
                and_(
                    invitations_table.c.tenant_id == tenant_id,
                    invitations_table.c.email == email,
                    invitations_table.c.status == InvitationStatus.PENDING.value,
                )
            )
            .order_by(invitations_table.c.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: Invitation to save

        Returns:
            Saved invitation
        """
        invitation_dict = invitation_to_dict(invitation)

        existing = await self.find_by_id(invitation.id)

        if existing:
            stmt = (
                update(invitations_table)
                .where(invitations_table.c.id == invitation.id)
                .values(**invitation_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = insert(invitations_table).values(**invitation_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return invitation
