"""
License lifecycle handlers.

Handlers for grant, batch grant, revoke, transfer and metadata update
commands. Each handler runs the synchronous lifecycle controller in a
worker thread and publishes a domain event once the operation commits.
"""
from typing import Optional

from asgiref.sync import sync_to_async

from core.domain.events import EventBus
from core.infrastructure.events import event_bus as default_event_bus
from registry.application.commands.batch_grant_licenses import BatchGrantLicensesCommand
from registry.application.commands.grant_license import GrantLicenseCommand
from registry.application.commands.revoke_license import RevokeLicenseCommand
from registry.application.commands.transfer_license import TransferLicenseCommand
from registry.application.commands.update_license_metadata import (
    UpdateLicenseMetadataCommand,
)
from registry.application.dto.license_dto import BatchGrantResponseDTO, GrantLicenseResponseDTO
from registry.domain.events import (
    LicenseGranted,
    LicenseMetadataUpdated,
    LicenseRevoked,
    LicensesBatchGranted,
    LicenseTransferred,
)
from registry.domain.services import LicenseLifecycleController


class _RegistryCommandHandler:
    """Shared wiring for registry command handlers."""

    def __init__(
        self,
        registry: LicenseLifecycleController,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with the registry and event bus."""
        self.registry = registry
        self.event_bus = event_bus or default_event_bus


class GrantLicenseHandler(_RegistryCommandHandler):
    """Handler for GrantLicenseCommand."""

    async def handle(self, command: GrantLicenseCommand) -> GrantLicenseResponseDTO:
        """
        Handle grant license command.

        Args:
            command: GrantLicenseCommand

        Returns:
            GrantLicenseResponseDTO with the new license ID

        Raises:
            UnauthorizedError: If caller is not the administrator
            InvalidMetadataError: If metadata is invalid
        """
        license_id = await sync_to_async(self.registry.grant)(command.caller, command.metadata)

        await self.event_bus.publish(LicenseGranted(license_id=license_id, holder=command.caller))

        return GrantLicenseResponseDTO(license_id=license_id)


class BatchGrantLicensesHandler(_RegistryCommandHandler):
    """Handler for BatchGrantLicensesCommand."""

    async def handle(self, command: BatchGrantLicensesCommand) -> BatchGrantResponseDTO:
        """
        Handle batch grant command.

        Args:
            command: BatchGrantLicensesCommand

        Returns:
            BatchGrantResponseDTO; issued may be lower than requested

        Raises:
            UnauthorizedError: If caller is not the administrator
            BatchLimitExceededError: If the batch is too large
            InvalidMetadataError: If any entry is invalid
        """
        license_ids = await sync_to_async(self.registry.batch_grant)(
            command.caller, command.metadatas
        )

        for license_id in license_ids:
            await self.event_bus.publish(
                LicenseGranted(license_id=license_id, holder=command.caller)
            )
        await self.event_bus.publish(
            LicensesBatchGranted(
                license_ids=tuple(license_ids),
                holder=command.caller,
                requested=len(command.metadatas),
            )
        )

        return BatchGrantResponseDTO(
            license_ids=license_ids,
            requested=len(command.metadatas),
            issued=len(license_ids),
        )


class RevokeLicenseHandler(_RegistryCommandHandler):
    """Handler for RevokeLicenseCommand."""

    async def handle(self, command: RevokeLicenseCommand) -> bool:
        """
        Handle revoke license command.

        Args:
            command: RevokeLicenseCommand

        Returns:
            True on success

        Raises:
            LicenseNotFoundError: If license has no holder
            LicenseAlreadyRevokedError: If license is already revoked
            UnauthorizedError: If caller is not the holder
        """
        await sync_to_async(self.registry.revoke)(command.caller, command.license_id)

        await self.event_bus.publish(
            LicenseRevoked(license_id=command.license_id, revoked_by=command.caller)
        )

        return True


class TransferLicenseHandler(_RegistryCommandHandler):
    """Handler for TransferLicenseCommand."""

    async def handle(self, command: TransferLicenseCommand) -> bool:
        """
        Handle transfer license command.

        Args:
            command: TransferLicenseCommand

        Returns:
            True on success

        Raises:
            UnauthorizedError: If caller is not the recipient or from_holder
                is not the holder
            LicenseRevokedError: If license is revoked
            LicenseNotFoundError: If license has no holder
        """
        await sync_to_async(self.registry.transfer)(
            command.caller, command.license_id, command.from_holder, command.to_holder
        )

        await self.event_bus.publish(
            LicenseTransferred(
                license_id=command.license_id,
                from_holder=command.from_holder,
                to_holder=command.to_holder,
            )
        )

        return True


class UpdateLicenseMetadataHandler(_RegistryCommandHandler):
    """Handler for UpdateLicenseMetadataCommand."""

    async def handle(self, command: UpdateLicenseMetadataCommand) -> bool:
        """
        Handle update license metadata command.

        Args:
            command: UpdateLicenseMetadataCommand

        Returns:
            True on success

        Raises:
            LicenseNotFoundError: If license has no holder
            UnauthorizedError: If caller is not the holder
            InvalidMetadataError: If metadata is invalid
        """
        await sync_to_async(self.registry.update_metadata)(
            command.caller, command.license_id, command.metadata
        )

        await self.event_bus.publish(
            LicenseMetadataUpdated(license_id=command.license_id, updated_by=command.caller)
        )

        return True
