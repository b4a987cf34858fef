"""
In-memory implementations of the registry ports.

Suitable for tests and for embedding the registry in a single process.
State lives in plain dicts and sets keyed by license ID.
"""
import contextlib
from typing import Any, Dict, Iterator, Optional, Set

from core.domain.exceptions import (
    LedgerEntryExistsError,
    LedgerEntryNotFoundError,
    LedgerNotOwnerError,
    LicenseExistsError,
)
from registry.ports.issuance_counter import IssuanceCounter
from registry.ports.metadata_store import MetadataStore
from registry.ports.ownership_ledger import OwnershipLedger
from registry.ports.revocation_ledger import RevocationLedger


class InMemoryOwnershipLedger(OwnershipLedger):
    """Ownership ledger backed by a dict of license ID to owner."""

    def __init__(self):
        self._owners: Dict[int, str] = {}

    def create(self, license_id: int, owner: str) -> None:
        if license_id in self._owners:
            raise LedgerEntryExistsError(f"License {license_id} already has an owner")
        self._owners[license_id] = owner

    def destroy(self, license_id: int, expected_owner: str) -> None:
        owner = self._owners.get(license_id)
        if owner is None:
            raise LedgerEntryNotFoundError(f"License {license_id} has no owner")
        if owner != expected_owner:
            raise LedgerNotOwnerError(f"{expected_owner!r} does not own license {license_id}")
        del self._owners[license_id]

    def reassign(self, license_id: int, from_owner: str, to_owner: str) -> None:
        if self._owners.get(license_id) != from_owner:
            raise LedgerEntryNotFoundError(
                f"License {license_id} is not owned by {from_owner!r}"
            )
        self._owners[license_id] = to_owner

    def owner_of(self, license_id: int) -> Optional[str]:
        return self._owners.get(license_id)

    def snapshot(self) -> Dict[int, str]:
        return dict(self._owners)

    def restore(self, state: Dict[int, str]) -> None:
        self._owners = dict(state)


class InMemoryMetadataStore(MetadataStore):
    """Metadata store backed by a dict."""

    def __init__(self):
        self._metadata: Dict[int, str] = {}

    def get(self, license_id: int) -> Optional[str]:
        return self._metadata.get(license_id)

    def put(self, license_id: int, metadata: str) -> None:
        self._metadata[license_id] = metadata

    def contains(self, license_id: int) -> bool:
        return license_id in self._metadata

    def snapshot(self) -> Dict[int, str]:
        return dict(self._metadata)

    def restore(self, state: Dict[int, str]) -> None:
        self._metadata = dict(state)


class InMemoryRevocationLedger(RevocationLedger):
    """Revocation ledger backed by a set of revoked IDs."""

    def __init__(self):
        self._revoked: Set[int] = set()

    def is_revoked(self, license_id: int) -> bool:
        return license_id in self._revoked

    def mark_revoked(self, license_id: int) -> None:
        self._revoked.add(license_id)

    def snapshot(self) -> Set[int]:
        return set(self._revoked)

    def restore(self, state: Set[int]) -> None:
        self._revoked = set(state)


class InMemoryIssuanceCounter(IssuanceCounter):
    """Issuance counter held in an attribute, starting at 0."""

    def __init__(self):
        self._last_issued_id = 0

    def current(self) -> int:
        return self._last_issued_id

    def advance(self, license_id: int) -> None:
        if license_id != self._last_issued_id + 1:
            raise LicenseExistsError(
                f"License {license_id} is not the next ID after {self._last_issued_id}"
            )
        self._last_issued_id = license_id

    def snapshot(self) -> int:
        return self._last_issued_id

    def restore(self, state: int) -> None:
        self._last_issued_id = state


class InMemoryUnitOfWork:
    """
    Unit of work over in-memory stores.

    Calling the instance opens a block; if the block raises, every store
    is restored to its state at entry. Blocks nest, so an inner failure
    only undoes the inner block.
    """

    def __init__(self, *stores: Any):
        """Initialize with stores providing snapshot() and restore()."""
        self.stores = stores

    @contextlib.contextmanager
    def __call__(self) -> Iterator[None]:
        states = [store.snapshot() for store in self.stores]
        try:
            yield
        except BaseException:
            for store, state in zip(self.stores, states):
                store.restore(state)
            raise
