"""
License registry query handlers.
"""
from typing import Optional

from asgiref.sync import sync_to_async

from registry.application.dto.license_dto import LicenseDTO, LicenseStatusDTO, RegistryStatusDTO
from registry.application.queries.get_license import GetLicenseQuery
from registry.application.queries.get_registry_status import GetRegistryStatusQuery
from registry.domain.services import LicenseLifecycleController


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(self, registry: LicenseLifecycleController):
        """Initialize handler with the registry."""
        self.registry = registry

    async def handle(self, query: GetLicenseQuery) -> Optional[LicenseDTO]:
        """
        Handle get license query.

        Args:
            query: GetLicenseQuery

        Returns:
            LicenseDTO or None if the license was never granted
        """
        license = await sync_to_async(self.registry.get_license)(query.license_id)
        if license is None:
            return None
        return LicenseDTO.from_entity(license)


class GetLicenseStatusHandler:
    """Handler for the status flags of a license ID."""

    def __init__(self, registry: LicenseLifecycleController):
        """Initialize handler with the registry."""
        self.registry = registry

    async def handle(self, query: GetLicenseQuery) -> LicenseStatusDTO:
        """
        Handle license status query. Unknown IDs report all flags False.

        Args:
            query: GetLicenseQuery

        Returns:
            LicenseStatusDTO
        """
        status = await sync_to_async(self.registry.get_status)(query.license_id)
        return LicenseStatusDTO(
            license_id=status.license_id,
            exists=status.exists,
            is_valid=status.is_valid,
            is_revoked=status.is_revoked,
            is_id_in_range=status.is_id_in_range,
            holder=status.holder,
        )


class GetRegistryStatusHandler:
    """Handler for GetRegistryStatusQuery."""

    def __init__(self, registry: LicenseLifecycleController):
        """Initialize handler with the registry."""
        self.registry = registry

    async def handle(self, query: GetRegistryStatusQuery) -> RegistryStatusDTO:
        """
        Handle registry status query.

        Args:
            query: GetRegistryStatusQuery

        Returns:
            RegistryStatusDTO
        """
        total_issued = await sync_to_async(self.registry.total_issued)()
        return RegistryStatusDTO(
            total_issued=total_issued,
            is_caller_admin=self.registry.is_caller_admin(query.caller),
        )
