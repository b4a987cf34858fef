"""
License domain entity.

A license pairs a bounded metadata blob with an ownership and a
revocation status. The registry assembles it from its three stores;
the entity itself is a read-only snapshot.
"""
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import LicenseStatus


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents one issued license as observed at a point in time.
    """

    id: int
    holder: Optional[str]
    metadata: str
    revoked: bool = False

    def __post_init__(self):
        """Validate license entity."""
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id < 1:
            raise ValueError("License ID must be a positive integer")
        if not self.metadata:
            raise ValueError("License metadata is required")
        if self.revoked and self.holder is not None:
            raise ValueError("A revoked license cannot have a holder")

    @property
    def status(self) -> LicenseStatus:
        """Current license status."""
        return LicenseStatus.REVOKED if self.revoked else LicenseStatus.VALID

    def is_valid(self) -> bool:
        """
        Check if license is currently valid.

        Returns:
            True if license has not been revoked
        """
        return not self.revoked

    def is_held_by(self, identity: str) -> bool:
        """
        Check whether an identity currently holds this license.

        Args:
            identity: Identity to check

        Returns:
            True if the identity is the current holder
        """
        return self.holder is not None and self.holder == identity


@dataclass(frozen=True)
class LicenseStatusSnapshot:
    """Status flags of a license ID, read together at one point in time."""

    license_id: int
    exists: bool
    is_valid: bool
    is_revoked: bool
    is_id_in_range: bool
    holder: Optional[str]
