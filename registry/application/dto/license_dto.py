"""
License registry DTOs for API responses.
"""
from dataclasses import dataclass
from typing import List, Optional

from registry.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for a license snapshot."""

    id: int
    holder: Optional[str]
    metadata: str
    status: str
    is_revoked: bool

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        """Build the DTO from a License entity."""
        return cls(
            id=license.id,
            holder=license.holder,
            metadata=license.metadata,
            status=license.status.value,
            is_revoked=license.revoked,
        )


@dataclass
class LicenseStatusDTO:
    """DTO for the status flags of a license ID."""

    license_id: int
    exists: bool
    is_valid: bool
    is_revoked: bool
    is_id_in_range: bool
    holder: Optional[str]


@dataclass
class GrantLicenseResponseDTO:
    """DTO for a single grant response."""

    license_id: int


@dataclass
class BatchGrantResponseDTO:
    """DTO for a batch grant response."""

    license_ids: List[int]
    requested: int
    issued: int


@dataclass
class RegistryStatusDTO:
    """DTO for registry-wide status."""

    total_issued: int
    is_caller_admin: bool
