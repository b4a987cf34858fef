"""
License registry domain services.

Domain services contain the business logic of the registry: metadata
validation, role checks and the license lifecycle itself.
"""
import contextlib
import logging
import threading
from typing import Callable, ContextManager, Iterable, List, Optional

from core.domain.exceptions import (
    BatchLimitExceededError,
    EmptyMetadataError,
    InvalidLicenseIdError,
    InvalidMetadataError,
    LedgerEntryExistsError,
    LedgerEntryNotFoundError,
    LedgerNotOwnerError,
    LicenseAlreadyRevokedError,
    LicenseExistsError,
    LicenseNotFoundError,
    LicenseRevokedError,
    UnauthorizedError,
)
from registry.domain.license import License, LicenseStatusSnapshot
from registry.ports.issuance_counter import IssuanceCounter
from registry.ports.metadata_store import MetadataStore
from registry.ports.ownership_ledger import OwnershipLedger
from registry.ports.revocation_ledger import RevocationLedger

logger = logging.getLogger(__name__)

MAX_METADATA_LENGTH = 512
MAX_BATCH_SIZE = 50


def _is_license_id(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


class MetadataValidator:
    """Domain service for license metadata validation."""

    @staticmethod
    def validate(metadata) -> tuple[bool, Optional[str]]:
        """
        Validate a metadata blob.

        Args:
            metadata: Candidate metadata

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not isinstance(metadata, str):
            return False, "License metadata must be text"
        if len(metadata) == 0:
            return False, "License metadata cannot be empty"
        if len(metadata) > MAX_METADATA_LENGTH:
            return False, f"License metadata exceeds {MAX_METADATA_LENGTH} characters"
        return True, None

    @staticmethod
    def ensure_valid(metadata) -> None:
        """
        Validate a metadata blob, raising on failure.

        Args:
            metadata: Candidate metadata

        Raises:
            EmptyMetadataError: If metadata is empty
            InvalidMetadataError: If metadata is not text or is too long
        """
        is_valid, error = MetadataValidator.validate(metadata)
        if is_valid:
            return
        if isinstance(metadata, str) and len(metadata) == 0:
            raise EmptyMetadataError(error)
        raise InvalidMetadataError(error)


class AuthorizationGate:
    """
    Domain service resolving caller roles.

    The administrator is fixed when the registry is created; the holder
    of a license is looked up in the ownership ledger on every check.
    """

    def __init__(self, administrator: str, ownership_ledger: OwnershipLedger):
        """Initialize gate with the registry administrator and ledger."""
        self.administrator = administrator
        self.ownership_ledger = ownership_ledger

    def is_administrator(self, caller: Optional[str]) -> bool:
        """Check whether caller is the registry administrator."""
        return caller is not None and caller == self.administrator

    def require_administrator(self, caller: Optional[str]) -> None:
        """
        Require the administrator role.

        Raises:
            UnauthorizedError: If caller is not the administrator
        """
        if not self.is_administrator(caller):
            raise UnauthorizedError("Only the registry administrator can issue licenses")

    def require_holder(self, caller: Optional[str], license_id: int) -> str:
        """
        Require caller to be the current holder of a license.

        Args:
            caller: Caller identity
            license_id: License ID

        Returns:
            The holder identity

        Raises:
            LicenseNotFoundError: If the license has no current holder
            UnauthorizedError: If caller is not the holder
        """
        holder = self.ownership_ledger.owner_of(license_id)
        if holder is None:
            raise LicenseNotFoundError(f"License {license_id} not found")
        if caller != holder:
            raise UnauthorizedError(f"Caller does not hold license {license_id}")
        return holder


class LicenseLifecycleController:
    """
    Domain service driving the license lifecycle.

    Every mutating operation authorizes the caller, validates its input,
    calls the ownership ledger and only then records metadata, revocation
    and the issuance counter. Operations run one at a time under a shared
    lock and inside one unit of work.
    """

    def __init__(
        self,
        administrator: str,
        ownership_ledger: OwnershipLedger,
        metadata_store: MetadataStore,
        revocation_ledger: RevocationLedger,
        issuance_counter: IssuanceCounter,
        unit_of_work: Optional[Callable[[], ContextManager]] = None,
        lock: Optional[threading.RLock] = None,
    ):
        """
        Initialize the controller.

        Args:
            administrator: Identity allowed to issue licenses
            ownership_ledger: Ownership ledger adapter
            metadata_store: Metadata store adapter
            revocation_ledger: Revocation ledger adapter
            issuance_counter: Last-issued-id counter adapter
            unit_of_work: Factory for the transaction wrapping each operation
            lock: Lock shared by every controller bound to the same stores
        """
        if not administrator:
            raise ValueError("Registry administrator is required")
        self.ownership_ledger = ownership_ledger
        self.metadata_store = metadata_store
        self.revocation_ledger = revocation_ledger
        self.issuance_counter = issuance_counter
        self.gate = AuthorizationGate(administrator, ownership_ledger)
        self._unit_of_work = unit_of_work or contextlib.nullcontext
        self._lock = lock or threading.RLock()

    @property
    def administrator(self) -> str:
        """Registry administrator identity."""
        return self.gate.administrator

    @contextlib.contextmanager
    def _operation(self):
        with self._lock, self._unit_of_work():
            yield

    @staticmethod
    def _require_license_id(license_id) -> None:
        if not _is_license_id(license_id):
            raise InvalidLicenseIdError(f"Invalid license ID: {license_id!r}")

    # Issuance

    def grant(self, caller: str, metadata: str) -> int:
        """
        Issue a single license held by the administrator.

        Args:
            caller: Caller identity
            metadata: License metadata (1-512 characters)

        Returns:
            The new license ID

        Raises:
            UnauthorizedError: If caller is not the administrator
            InvalidMetadataError: If metadata is invalid
            LicenseExistsError: If the ledger already knows the next ID
        """
        with self._operation():
            self.gate.require_administrator(caller)
            MetadataValidator.ensure_valid(metadata)
            return self._issue(caller, metadata)

    def batch_grant(self, caller: str, metadatas: Iterable[str]) -> List[int]:
        """
        Issue one license per metadata entry, in order.

        All entries are validated before anything is issued. Once issuance
        starts, an entry that fails for any reason is rolled back, skipped
        and left out of the result; the remaining entries are still issued.

        Args:
            caller: Caller identity
            metadatas: Up to MAX_BATCH_SIZE metadata entries

        Returns:
            IDs of the issued licenses, in input order

        Raises:
            UnauthorizedError: If caller is not the administrator
            BatchLimitExceededError: If more than MAX_BATCH_SIZE entries are given
            InvalidMetadataError: If any entry is invalid
        """
        with self._operation():
            self.gate.require_administrator(caller)
            if isinstance(metadatas, str):
                raise InvalidMetadataError("Batch metadata must be a sequence of entries")
            entries = list(metadatas)
            if len(entries) > MAX_BATCH_SIZE:
                raise BatchLimitExceededError(
                    f"Batch of {len(entries)} exceeds the limit of {MAX_BATCH_SIZE}"
                )
            for index, metadata in enumerate(entries):
                try:
                    MetadataValidator.ensure_valid(metadata)
                except InvalidMetadataError as exc:
                    raise type(exc)(f"Batch entry {index}: {exc.message}") from exc

            issued = []
            for index, metadata in enumerate(entries):
                try:
                    with self._unit_of_work():
                        license_id = self._issue(caller, metadata)
                except Exception as exc:  # pylint: disable=broad-exception-caught
                    logger.warning(
                        "Skipping batch entry %d: %s",
                        index,
                        exc,
                        extra={"error_code": getattr(exc, "code", type(exc).__name__)},
                        exc_info=True,
                    )
                    continue
                issued.append(license_id)

        logger.info("Batch issued %d of %d license(s)", len(issued), len(entries))
        return issued

    def _issue(self, holder: str, metadata: str) -> int:
        license_id = self.issuance_counter.current() + 1
        try:
            self.ownership_ledger.create(license_id, holder)
        except LedgerEntryExistsError as exc:
            logger.error(
                "Invariant violation: license %d already has an owner", license_id, exc_info=True
            )
            raise LicenseExistsError(f"License {license_id} already exists") from exc
        self.metadata_store.put(license_id, metadata)
        self.issuance_counter.advance(license_id)
        logger.info("Granted license %d", license_id, extra={"license_id": license_id})
        return license_id

    # Holder operations

    def revoke(self, caller: str, license_id: int) -> bool:
        """
        Revoke a license permanently.

        The ownership entry is destroyed and the revoked flag set in the
        same unit of work.

        Args:
            caller: Caller identity
            license_id: License ID

        Returns:
            True on success

        Raises:
            InvalidLicenseIdError: If license_id is not a positive integer
            LicenseAlreadyRevokedError: If the license is already revoked
            LicenseNotFoundError: If the license has no current holder
            UnauthorizedError: If caller is not the holder
        """
        self._require_license_id(license_id)
        with self._operation():
            if self.revocation_ledger.is_revoked(license_id):
                raise LicenseAlreadyRevokedError(f"License {license_id} is already revoked")
            holder = self.gate.require_holder(caller, license_id)
            try:
                self.ownership_ledger.destroy(license_id, holder)
            except LedgerEntryNotFoundError as exc:
                raise LicenseNotFoundError(f"License {license_id} not found") from exc
            except LedgerNotOwnerError as exc:
                raise UnauthorizedError(f"Caller does not hold license {license_id}") from exc
            self.revocation_ledger.mark_revoked(license_id)

        logger.info("Revoked license %d", license_id, extra={"license_id": license_id})
        return True

    def transfer(self, caller: str, license_id: int, from_holder: str, to_holder: str) -> bool:
        """
        Move a license from its holder to the calling recipient.

        The recipient initiates the transfer; a holder cannot push a
        license onto someone else.

        Args:
            caller: Caller identity, must equal to_holder
            license_id: License ID
            from_holder: Expected current holder
            to_holder: New holder

        Returns:
            True on success

        Raises:
            InvalidLicenseIdError: If license_id is not a positive integer
            UnauthorizedError: If caller is not the recipient or from_holder
                is not the current holder
            LicenseRevokedError: If the license is revoked
            LicenseNotFoundError: If the license has no current holder
        """
        self._require_license_id(license_id)
        with self._operation():
            if caller is None or caller != to_holder:
                raise UnauthorizedError("Only the recipient can accept a transfer")
            if self.revocation_ledger.is_revoked(license_id):
                raise LicenseRevokedError(f"License {license_id} is revoked")
            holder = self.ownership_ledger.owner_of(license_id)
            if holder is None:
                raise LicenseNotFoundError(f"License {license_id} not found")
            if holder != from_holder:
                raise UnauthorizedError(f"{from_holder!r} does not hold license {license_id}")
            try:
                self.ownership_ledger.reassign(license_id, from_holder, to_holder)
            except LedgerEntryNotFoundError as exc:
                raise LicenseNotFoundError(f"License {license_id} not found") from exc

        logger.info("Transferred license %d", license_id, extra={"license_id": license_id})
        return True

    def update_metadata(self, caller: str, license_id: int, new_metadata: str) -> bool:
        """
        Replace the metadata of a license.

        Args:
            caller: Caller identity
            license_id: License ID
            new_metadata: Replacement metadata (1-512 characters)

        Returns:
            True on success

        Raises:
            InvalidLicenseIdError: If license_id is not a positive integer
            LicenseNotFoundError: If the license has no current holder
            UnauthorizedError: If caller is not the holder
            InvalidMetadataError: If new_metadata is invalid
        """
        self._require_license_id(license_id)
        with self._operation():
            self.gate.require_holder(caller, license_id)
            MetadataValidator.ensure_valid(new_metadata)
            self.metadata_store.put(license_id, new_metadata)

        logger.info("Updated metadata of license %d", license_id, extra={"license_id": license_id})
        return True

    # Queries

    def get_metadata(self, license_id) -> Optional[str]:
        """Metadata of a license, or None if unknown."""
        if not _is_license_id(license_id):
            return None
        with self._lock:
            return self.metadata_store.get(license_id)

    def get_holder(self, license_id) -> Optional[str]:
        """Current holder of a license, or None if unissued or revoked."""
        if not _is_license_id(license_id):
            return None
        with self._lock:
            return self.ownership_ledger.owner_of(license_id)

    def exists(self, license_id) -> bool:
        """Whether the license has ever been granted."""
        if not _is_license_id(license_id):
            return False
        with self._lock:
            return self.metadata_store.contains(license_id)

    def is_revoked(self, license_id) -> bool:
        """Whether the license has been revoked."""
        if not _is_license_id(license_id):
            return False
        with self._lock:
            return self.revocation_ledger.is_revoked(license_id)

    def is_valid(self, license_id) -> bool:
        """Whether the license exists and is not revoked."""
        if not _is_license_id(license_id):
            return False
        with self._lock:
            return self.metadata_store.contains(license_id) and not (
                self.revocation_ledger.is_revoked(license_id)
            )

    def total_issued(self) -> int:
        """Number of licenses issued so far, equal to the last issued ID."""
        with self._lock:
            return self.issuance_counter.current()

    def is_id_in_range(self, license_id) -> bool:
        """Whether 1 <= license_id <= total_issued()."""
        if not _is_license_id(license_id):
            return False
        return license_id <= self.total_issued()

    def is_caller_admin(self, caller: Optional[str]) -> bool:
        """Whether caller is the registry administrator."""
        return self.gate.is_administrator(caller)

    def get_license(self, license_id) -> Optional[License]:
        """
        Snapshot of a license.

        Args:
            license_id: License ID

        Returns:
            License entity or None if the license is unknown
        """
        if not _is_license_id(license_id):
            return None
        with self._lock:
            metadata = self.metadata_store.get(license_id)
            if metadata is None:
                return None
            return License(
                id=license_id,
                holder=self.ownership_ledger.owner_of(license_id),
                metadata=metadata,
                revoked=self.revocation_ledger.is_revoked(license_id),
            )

    def get_status(self, license_id) -> LicenseStatusSnapshot:
        """
        Status flags of a license ID, read under a single lock acquisition.

        Args:
            license_id: License ID, which may be malformed

        Returns:
            LicenseStatusSnapshot; unknown or malformed IDs report every flag False
        """
        if not _is_license_id(license_id):
            return LicenseStatusSnapshot(license_id, False, False, False, False, None)
        with self._lock:
            exists = self.metadata_store.contains(license_id)
            revoked = self.revocation_ledger.is_revoked(license_id)
            return LicenseStatusSnapshot(
                license_id=license_id,
                exists=exists,
                is_valid=exists and not revoked,
                is_revoked=revoked,
                is_id_in_range=license_id <= self.issuance_counter.current(),
                holder=self.ownership_ledger.owner_of(license_id),
            )
