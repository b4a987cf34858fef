"""
Pytest configuration and shared fixtures.
"""

import pytest

from core.infrastructure.events import InMemoryEventBus
from registry.infrastructure.container import build_in_memory_registry

ADMIN = "registry-admin"
ALICE = "alice"
BOB = "bob"


@pytest.fixture
def admin():
    """Fixture for the registry administrator identity."""
    return ADMIN


@pytest.fixture
def registry(admin):
    """Fixture for a registry backed by in-memory stores."""
    return build_in_memory_registry(admin)


@pytest.fixture
def event_bus():
    """Fixture for an isolated event bus with no subscribers."""
    return InMemoryEventBus()


@pytest.fixture
def granted_license(registry, admin):
    """Fixture for a license granted to the administrator."""
    return registry.grant(admin, "tier=gold")


@pytest.fixture
def alice_license(registry, admin, granted_license):
    """Fixture for a license transferred from the administrator to alice."""
    registry.transfer(ALICE, granted_license, admin, ALICE)
    return granted_license


@pytest.fixture
def django_registry(db, settings):
    """Fixture for the database-backed registry."""
    from registry.infrastructure.container import get_license_registry

    settings.LICENSE_REGISTRY_ADMINISTRATOR = ADMIN
    return get_license_registry()


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
