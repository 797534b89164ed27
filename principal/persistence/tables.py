"""SQLAlchemy table definitions for the guest service.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (shared by guest and enterprise accounts)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("tenant_id", UUID, nullable=False),
    Column("email", String(254), nullable=False),  # Stored lower-cased
    Column("username", String(254), nullable=False),  # Stored lower-cased
    Column("first_name", String(255), nullable=False),
    Column("last_name", String(255), nullable=False),
    Column("group_ids", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("user_type", String(20), nullable=False, server_default="guest"),
    Column("license_type", String(50), nullable=True),
    Column("password_hash", String(255), nullable=True),
    Column("email_verified", Boolean, nullable=False, server_default="false"),
    Column("is_locked", Boolean, nullable=False, server_default="false"),
    Column(
        "failed_verification_attempts", Integer, nullable=False, server_default="0"
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("version", Integer, nullable=False, server_default="0"),
    UniqueConstraint("tenant_id", "email", name="uq_users_tenant_email"),
    UniqueConstraint("tenant_id", "username", name="uq_users_tenant_username"),
    CheckConstraint(
        "failed_verification_attempts >= 0", name="check_users_failed_attempts"
    ),
)

Index("idx_users_email", users_table.c.email)
Index("idx_users_group_ids", users_table.c.group_ids, postgresql_using="gin")

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("tenant_id", UUID, nullable=False),
    Column("email", String(254), nullable=False),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("token", String(255), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_invitations_tenant_email_status",
    invitations_table.c.tenant_id,
    invitations_table.c.email,
    invitations_table.c.status,
)

# ============================================================================
# VERIFICATION CODES TABLE
# ============================================================================
verification_codes_table = Table(
    "verification_codes",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user_id", UUID, nullable=False),
    Column("code", String(255), nullable=False),
    Column("issued_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("consumed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("sent_at", TIMESTAMP(timezone=True), nullable=True),
)

# At most one unconsumed code per user
Index(
    "uq_verification_codes_active_user",
    verification_codes_table.c.user_id,
    unique=True,
    postgresql_where=verification_codes_table.c.consumed_at.is_(None),
)

# ============================================================================
# LICENSE TABLES
# ============================================================================
license_pools_table = Table(
    "license_pools",
    metadata,
    Column("tenant_id", UUID, nullable=False),
    Column("license_type", String(50), nullable=False),
    Column("total_seats", Integer, nullable=False, server_default="0"),
    Column("allocated_seats", Integer, nullable=False, server_default="0"),
    PrimaryKeyConstraint("tenant_id", "license_type", name="pk_license_pools"),
    CheckConstraint(
        "allocated_seats >= 0 AND allocated_seats <= total_seats",
        name="check_license_pools_allocation",
    ),
)

license_assignments_table = Table(
    "license_assignments",
    metadata,
    Column("user_id", UUID, primary_key=True),  # One assignment per user
    Column("tenant_id", UUID, nullable=False),
    Column("license_type", String(50), nullable=False),
    Column(
        "assigned_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_license_assignments_pool",
    license_assignments_table.c.tenant_id,
    license_assignments_table.c.license_type,
)
