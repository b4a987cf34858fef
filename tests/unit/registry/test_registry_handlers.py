"""
Unit tests for registry command and query handlers.
"""
import pytest

from core.domain.exceptions import LicenseNotFoundError, UnauthorizedError
from core.domain.events import EventHandler
from registry.application.commands.batch_grant_licenses import BatchGrantLicensesCommand
from registry.application.commands.grant_license import GrantLicenseCommand
from registry.application.commands.revoke_license import RevokeLicenseCommand
from registry.application.commands.transfer_license import TransferLicenseCommand
from registry.application.commands.update_license_metadata import (
    UpdateLicenseMetadataCommand,
)
from registry.application.handlers.license_lifecycle_handlers import (
    BatchGrantLicensesHandler,
    GrantLicenseHandler,
    RevokeLicenseHandler,
    TransferLicenseHandler,
    UpdateLicenseMetadataHandler,
)
from registry.application.handlers.license_query_handlers import (
    GetLicenseHandler,
    GetLicenseStatusHandler,
    GetRegistryStatusHandler,
)
from registry.application.queries.get_license import GetLicenseQuery
from registry.application.queries.get_registry_status import GetRegistryStatusQuery
from registry.domain.events import (
    LicenseGranted,
    LicenseMetadataUpdated,
    LicenseRevoked,
    LicensesBatchGranted,
    LicenseTransferred,
)


class RecordingHandler(EventHandler):
    """Event handler that keeps every event it receives."""

    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


@pytest.fixture
def recorder(event_bus):
    handler = RecordingHandler()
    for event_type in (
        LicenseGranted,
        LicensesBatchGranted,
        LicenseTransferred,
        LicenseRevoked,
        LicenseMetadataUpdated,
    ):
        event_bus.subscribe(event_type, handler)
    return handler


@pytest.mark.asyncio
class TestLifecycleHandlers:
    """Tests for lifecycle command handlers."""

    async def test_grant_license(self, registry, admin, event_bus, recorder):
        """Test grant returns the new ID and publishes LicenseGranted."""
        handler = GrantLicenseHandler(registry, event_bus)

        result = await handler.handle(GrantLicenseCommand(caller=admin, metadata="tier=gold"))

        assert result.license_id == 1
        assert len(recorder.events) == 1
        event = recorder.events[0]
        assert isinstance(event, LicenseGranted)
        assert event.license_id == 1
        assert event.holder == admin

    async def test_grant_license_unauthorized(self, registry, event_bus, recorder):
        """Test failed grants publish nothing."""
        handler = GrantLicenseHandler(registry, event_bus)

        with pytest.raises(UnauthorizedError):
            await handler.handle(GrantLicenseCommand(caller="alice", metadata="tier=gold"))

        assert recorder.events == []

    async def test_batch_grant(self, registry, admin, event_bus, recorder):
        """Test batch grant reports counts and publishes per-license events."""
        handler = BatchGrantLicensesHandler(registry, event_bus)

        result = await handler.handle(
            BatchGrantLicensesCommand(caller=admin, metadatas=["A", "B", "C"])
        )

        assert result.license_ids == [1, 2, 3]
        assert result.requested == 3
        assert result.issued == 3
        granted = [e for e in recorder.events if isinstance(e, LicenseGranted)]
        assert [e.license_id for e in granted] == [1, 2, 3]
        batch = [e for e in recorder.events if isinstance(e, LicensesBatchGranted)]
        assert len(batch) == 1
        assert batch[0].license_ids == (1, 2, 3)
        assert batch[0].aggregate_id == "1,2,3"

    async def test_revoke_license(self, registry, admin, granted_license, event_bus, recorder):
        """Test revoke publishes LicenseRevoked."""
        handler = RevokeLicenseHandler(registry, event_bus)

        result = await handler.handle(
            RevokeLicenseCommand(caller=admin, license_id=granted_license)
        )

        assert result is True
        assert registry.is_revoked(granted_license)
        assert isinstance(recorder.events[0], LicenseRevoked)
        assert recorder.events[0].revoked_by == admin

    async def test_revoke_unknown_license(self, registry, admin, event_bus, recorder):
        """Test revoking an unknown license publishes nothing."""
        handler = RevokeLicenseHandler(registry, event_bus)

        with pytest.raises(LicenseNotFoundError):
            await handler.handle(RevokeLicenseCommand(caller=admin, license_id=5))

        assert recorder.events == []

    async def test_transfer_license(self, registry, admin, granted_license, event_bus, recorder):
        """Test transfer publishes LicenseTransferred."""
        handler = TransferLicenseHandler(registry, event_bus)

        await handler.handle(
            TransferLicenseCommand(
                caller="alice",
                license_id=granted_license,
                from_holder=admin,
                to_holder="alice",
            )
        )

        assert registry.get_holder(granted_license) == "alice"
        event = recorder.events[0]
        assert isinstance(event, LicenseTransferred)
        assert (event.from_holder, event.to_holder) == (admin, "alice")

    async def test_update_metadata(self, registry, admin, granted_license, event_bus, recorder):
        """Test metadata update publishes LicenseMetadataUpdated."""
        handler = UpdateLicenseMetadataHandler(registry, event_bus)

        await handler.handle(
            UpdateLicenseMetadataCommand(
                caller=admin, license_id=granted_license, metadata="tier=silver"
            )
        )

        assert registry.get_metadata(granted_license) == "tier=silver"
        assert isinstance(recorder.events[0], LicenseMetadataUpdated)


@pytest.mark.asyncio
class TestQueryHandlers:
    """Tests for registry query handlers."""

    async def test_get_license(self, registry, granted_license):
        """Test license lookup returns a DTO."""
        result = await GetLicenseHandler(registry).handle(
            GetLicenseQuery(license_id=granted_license)
        )

        assert result.id == granted_license
        assert result.metadata == "tier=gold"
        assert result.status == "valid"
        assert result.is_revoked is False

    async def test_get_unknown_license(self, registry):
        """Test unknown licenses return None."""
        assert await GetLicenseHandler(registry).handle(GetLicenseQuery(license_id=9)) is None

    async def test_license_status_unknown(self, registry):
        """Test every flag is false for an unknown ID."""
        result = await GetLicenseStatusHandler(registry).handle(GetLicenseQuery(license_id=9))

        assert not result.exists
        assert not result.is_valid
        assert not result.is_revoked
        assert not result.is_id_in_range
        assert result.holder is None

    async def test_license_status_revoked(self, registry, admin, granted_license):
        """Test flags of a revoked license."""
        registry.revoke(admin, granted_license)

        result = await GetLicenseStatusHandler(registry).handle(
            GetLicenseQuery(license_id=granted_license)
        )

        assert result.exists
        assert not result.is_valid
        assert result.is_revoked
        assert result.is_id_in_range
        assert result.holder is None

    async def test_registry_status(self, registry, admin, granted_license):
        """Test registry status for administrator and others."""
        handler = GetRegistryStatusHandler(registry)

        as_admin = await handler.handle(GetRegistryStatusQuery(caller=admin))
        as_alice = await handler.handle(GetRegistryStatusQuery(caller="alice"))

        assert as_admin.total_issued == 1
        assert as_admin.is_caller_admin is True
        assert as_alice.is_caller_admin is False
