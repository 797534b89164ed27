"""PostgreSQL implementation of VerificationCode repository."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from principal.domain.model import VerificationCode
from principal.domain.repository import VerificationCodeRepository
from principal.domain.value import UserId, VerificationCodeId
from principal.persistence.mappers import (
    row_to_verification_code,
    verification_code_to_dict,
)
from principal.persistence.tables import verification_codes_table


class PostgresVerificationCodeRepository(VerificationCodeRepository):
    """PostgreSQL implementation of VerificationCodeRepository.

    The partial unique index ``uq_verification_codes_active_user`` keeps at
    most one unconsumed code per user.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def issue(
        self, user_id: UserId, code: str, issued_at: datetime, expires_at: datetime
    ) -> VerificationCode:
        """Replace the user's unconsumed code with a new one.

        Runs in a savepoint so a failure leaves the surrounding transaction
        usable.
        """
        verification_code = VerificationCode(
            id=VerificationCodeId(uuid4()),
            user_id=user_id,
            code=code,
            issued_at=issued_at,
            expires_at=expires_at,
        )

        async with self.session.begin_nested():
            await self.session.execute(
                delete(verification_codes_table).where(
                    and_(
                        verification_codes_table.c.user_id == user_id,
                        verification_codes_table.c.consumed_at.is_(None),
                    )
                )
            )
            await self.session.execute(
                insert(verification_codes_table).values(
                    **verification_code_to_dict(verification_code)
                )
            )
        return verification_code

    async def find_active(
        self, user_id: UserId, now: datetime
    ) -> Optional[VerificationCode]:
        """Find the user's unconsumed, unexpired code."""
        stmt = (
            select(verification_codes_table)
            .where(
                and_(
                    verification_codes_table.c.user_id == user_id,
                    verification_codes_table.c.consumed_at.is_(None),
                    verification_codes_table.c.expires_at > now,
                )
            )
            .order_by(verification_codes_table.c.issued_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_verification_code(dict(row)) if row else None

    async def consume(self, code_id: VerificationCodeId, consumed_at: datetime) -> bool:
        """Mark a code consumed unless another request already did."""
        stmt = (
            update(verification_codes_table)
            .where(
                and_(
                    verification_codes_table.c.id == code_id,
                    verification_codes_table.c.consumed_at.is_(None),
                )
            )
            .values(consumed_at=consumed_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def mark_sent(self, code_id: VerificationCodeId, sent_at: datetime) -> bool:
        """Record delivery time on a stored code."""
        stmt = (
            update(verification_codes_table)
            .where(verification_codes_table.c.id == code_id)
            .values(sent_at=sent_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
