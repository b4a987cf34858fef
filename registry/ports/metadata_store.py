"""
Metadata store port (interface).

Maps license IDs to their metadata blob. An ID with an entry is an
ID the registry knows about.
"""
from abc import ABC, abstractmethod
from typing import Optional


class MetadataStore(ABC):
    """Abstract store for license metadata."""

    @abstractmethod
    def get(self, license_id: int) -> Optional[str]:
        """
        Get the metadata stored for a license.

        Args:
            license_id: License ID

        Returns:
            Metadata or None if the license is unknown
        """
        pass

    @abstractmethod
    def put(self, license_id: int, metadata: str) -> None:
        """
        Store metadata for a license, replacing any previous value.

        Args:
            license_id: License ID
            metadata: Validated metadata blob
        """
        pass

    @abstractmethod
    def contains(self, license_id: int) -> bool:
        """
        Check if metadata exists for a license.

        Args:
            license_id: License ID

        Returns:
            True if the license is known, False otherwise
        """
        pass
