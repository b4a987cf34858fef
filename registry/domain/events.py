"""
License registry domain events.

Domain events represent something that happened in the license registry.
"""

from dataclasses import dataclass
from typing import Tuple

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseGranted(DomainEvent):
    """Event raised when a license is issued."""

    license_id: int
    holder: str

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)


@dataclass(frozen=True, kw_only=True)
class LicensesBatchGranted(DomainEvent):
    """Event raised when a batch issuance completes."""

    license_ids: Tuple[int, ...]
    holder: str
    requested: int

    @property
    def aggregate_id(self) -> str:
        return ",".join(str(license_id) for license_id in self.license_ids)


@dataclass(frozen=True, kw_only=True)
class LicenseTransferred(DomainEvent):
    """Event raised when a license changes holder."""

    license_id: int
    from_holder: str
    to_holder: str

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)


@dataclass(frozen=True, kw_only=True)
class LicenseRevoked(DomainEvent):
    """Event raised when a license is revoked."""

    license_id: int
    revoked_by: str

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)


@dataclass(frozen=True, kw_only=True)
class LicenseMetadataUpdated(DomainEvent):
    """Event raised when a holder replaces license metadata."""

    license_id: int
    updated_by: str

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)
