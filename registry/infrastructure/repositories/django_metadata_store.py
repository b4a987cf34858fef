"""
Django implementation of MetadataStore port.
"""
from typing import Optional

from registry.infrastructure.models import LicenseMetadata
from registry.ports.metadata_store import MetadataStore


class DjangoMetadataStore(MetadataStore):
    """Django ORM implementation of MetadataStore."""

    def get(self, license_id: int) -> Optional[str]:
        """
        Get the metadata stored for a license.

        Args:
            license_id: License ID

        Returns:
            Metadata or None if not found
        """
        return (
            LicenseMetadata.objects.filter(license_id=license_id)
            .values_list("metadata", flat=True)
            .first()
        )

    def put(self, license_id: int, metadata: str) -> None:
        """
        Store metadata for a license.

        Args:
            license_id: License ID
            metadata: Validated metadata blob
        """
        LicenseMetadata.objects.update_or_create(
            license_id=license_id, defaults={"metadata": metadata}
        )

    def contains(self, license_id: int) -> bool:
        """
        Check if metadata exists for a license.

        Args:
            license_id: License ID

        Returns:
            True if the license is known
        """
        return LicenseMetadata.objects.filter(license_id=license_id).exists()
