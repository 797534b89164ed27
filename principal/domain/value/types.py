"""Domain value objects for guest provisioning.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import EmailStr, field_validator

from principal.domain.value.common import RootValueObject


class UserType(str, Enum):
    """Kind of account held in the shared user store."""

    GUEST = "guest"
    ENTERPRISE = "enterprise"


class UserState(str, Enum):
    """Lifecycle state of a guest account, derived from its flags."""

    PENDING = "pending"
    LICENSED_UNVERIFIED = "licensed_unverified"
    ACTIVE = "active"
    LOCKED = "locked"


class InvitationStatus(str, Enum):
    """Status of a tenant invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    REVOKED = "revoked"


class LicenseType(str, Enum):
    """License types available in the seat inventory."""

    DEFAULT = "Default"
    USER_LICENSE = "UserLicense"
    LEGACY_LICENSE = "LegacyLicense"
    TRIAL_LICENSE = "TrialLicense"
    GUEST_LICENSE = "GuestLicense"
    ON_PREM_LICENSE = "OnPremLicense"


class LicenseReservationStatus(str, Enum):
    """Outcome of a seat reservation against the inventory."""

    RESERVED = "reserved"
    NO_SEATS_AVAILABLE = "no_seats_available"
    ALREADY_ASSIGNED = "already_assigned"


class LicenseFailureReason(str, Enum):
    """Why a license could not be assigned to a user."""

    NO_SEATS_AVAILABLE = "no_seats_available"
    ALREADY_ASSIGNED = "already_assigned"
    INVENTORY_UNAVAILABLE = "inventory_unavailable"


class EmailAddress(RootValueObject[EmailStr]):
    """Normalized email address.

    Leading/trailing whitespace is stripped and the address is lower-cased,
    then validated by email-validator (no deliverability lookup).
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: object) -> object:
        """Strip and lower-case string input."""
        if isinstance(v, str):
            return v.strip().lower()
        return v
