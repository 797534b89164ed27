"""Strongly typed identifiers for principal domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
TenantId = NewType("TenantId", UUID)
GroupId = NewType("GroupId", UUID)
InvitationId = NewType("InvitationId", UUID)
VerificationCodeId = NewType("VerificationCodeId", UUID)

# Reserved group granting cross-tenant privileged operations
SUPER_ADMIN_GROUP_ID = GroupId(UUID("a8b6f4a4-4a8e-4d9f-9d7e-6f0c3b1e2d11"))
