"""
Registry wiring.

Builds lifecycle controllers bound to the Django adapters (or to
in-memory adapters for embedded use). All Django-backed controllers in
a process share one lock.
"""
import threading

from django.conf import settings

from core.infrastructure.database import atomic_operation
from registry.domain.services import LicenseLifecycleController
from registry.infrastructure.repositories.django_issuance_counter import (
    DjangoIssuanceCounter,
    initialize_registry_state,
)
from registry.infrastructure.repositories.django_metadata_store import DjangoMetadataStore
from registry.infrastructure.repositories.django_ownership_ledger import DjangoOwnershipLedger
from registry.infrastructure.repositories.django_revocation_ledger import (
    DjangoRevocationLedger,
)
from registry.infrastructure.repositories.in_memory import (
    InMemoryIssuanceCounter,
    InMemoryMetadataStore,
    InMemoryOwnershipLedger,
    InMemoryRevocationLedger,
    InMemoryUnitOfWork,
)

_registry_lock = threading.RLock()


def get_license_registry() -> LicenseLifecycleController:
    """
    Get the Django-backed license registry.

    The registry state row is created on first use with the administrator
    from settings.LICENSE_REGISTRY_ADMINISTRATOR.

    Returns:
        LicenseLifecycleController bound to the database
    """
    state = initialize_registry_state(settings.LICENSE_REGISTRY_ADMINISTRATOR)
    return LicenseLifecycleController(
        administrator=state.administrator,
        ownership_ledger=DjangoOwnershipLedger(),
        metadata_store=DjangoMetadataStore(),
        revocation_ledger=DjangoRevocationLedger(),
        issuance_counter=DjangoIssuanceCounter(),
        unit_of_work=atomic_operation,
        lock=_registry_lock,
    )


def build_in_memory_registry(administrator: str) -> LicenseLifecycleController:
    """
    Build a registry whose state lives in process memory.

    Args:
        administrator: Identity allowed to issue licenses

    Returns:
        LicenseLifecycleController with fresh in-memory stores
    """
    ownership_ledger = InMemoryOwnershipLedger()
    metadata_store = InMemoryMetadataStore()
    revocation_ledger = InMemoryRevocationLedger()
    issuance_counter = InMemoryIssuanceCounter()
    return LicenseLifecycleController(
        administrator=administrator,
        ownership_ledger=ownership_ledger,
        metadata_store=metadata_store,
        revocation_ledger=revocation_ledger,
        issuance_counter=issuance_counter,
        unit_of_work=InMemoryUnitOfWork(ownership_ledger, metadata_store, revocation_ledger, issuance_counter),
    )
