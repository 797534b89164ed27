"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from principal.domain.model import (
    GuestUser,
    Invitation,
    LicenseAssignment,
    LicensePool,
    VerificationCode,
)
from principal.domain.value import (
    GroupId,
    InvitationId,
    InvitationStatus,
    LicenseType,
    TenantId,
    UserId,
    UserType,
    VerificationCodeId,
)


def _as_uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> GuestUser:
    """Convert database row to GuestUser domain model.

    Args:
        row: Database row as dict

    Returns:
        GuestUser domain model
    """
    license_type = row.get("license_type")
    return GuestUser(
        id=UserId(_as_uuid(row["id"])),
        tenant_id=TenantId(_as_uuid(row["tenant_id"])),
        email=row["email"],
        username=row["username"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        group_ids=frozenset(GroupId(_as_uuid(g)) for g in row.get("group_ids") or []),
        user_type=UserType(row["user_type"]),
        license_type=LicenseType(license_type) if license_type else None,
        password_hash=row.get("password_hash"),
        email_verified=row["email_verified"],
        is_locked=row["is_locked"],
        failed_verification_attempts=row["failed_verification_attempts"],
        created_at=row["created_at"],
        version=row["version"],
    )


def user_to_dict(user: GuestUser) -> Dict[str, Any]:
    """Convert GuestUser domain model to database dict.

    Args:
        user: GuestUser domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["group_ids"] = sorted(user.group_ids)
    data["user_type"] = user.user_type.value
    data["license_type"] = user.license_type.value if user.license_type else None
    return data


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model."""
    return Invitation(
        id=InvitationId(_as_uuid(row["id"])),
        tenant_id=TenantId(_as_uuid(row["tenant_id"])),
        email=row["email"],
        status=InvitationStatus(row["status"]),
        token=row.get("token"),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict."""
    data = invitation.model_dump()
    data["status"] = invitation.status.value
    return data


def row_to_verification_code(row: Dict[str, Any]) -> VerificationCode:
    """Convert database row to VerificationCode domain model."""
    return VerificationCode(
        id=VerificationCodeId(_as_uuid(row["id"])),
        user_id=UserId(_as_uuid(row["user_id"])),
        code=row["code"],
        issued_at=row["issued_at"],
        expires_at=row["expires_at"],
        consumed_at=row.get("consumed_at"),
        sent_at=row.get("sent_at"),
    )


def verification_code_to_dict(code: VerificationCode) -> Dict[str, Any]:
    """Convert VerificationCode domain model to database dict."""
    return code.model_dump()


def row_to_license_assignment(row: Dict[str, Any]) -> LicenseAssignment:
    """Convert database row to LicenseAssignment domain model."""
    return LicenseAssignment(
        user_id=UserId(_as_uuid(row["user_id"])),
        tenant_id=TenantId(_as_uuid(row["tenant_id"])),
        license_type=LicenseType(row["license_type"]),
        assigned_at=row["assigned_at"],
    )


def license_assignment_to_dict(assignment: LicenseAssignment) -> Dict[str, Any]:
    """Convert LicenseAssignment domain model to database dict."""
    data = assignment.model_dump()
    data["license_type"] = assignment.license_type.value
    return data


def row_to_license_pool(row: Dict[str, Any]) -> LicensePool:
    """Convert database row to LicensePool domain model."""
    return LicensePool(
        tenant_id=TenantId(_as_uuid(row["tenant_id"])),
        license_type=LicenseType(row["license_type"]),
        total_seats=row["total_seats"],
        allocated_seats=row["allocated_seats"],
    )
