"""
Django implementation of OwnershipLedger port.

Ownership is stored one row per license ID in the OwnershipRecord table.
"""
from typing import Optional

from django.db import IntegrityError, transaction

from core.domain.exceptions import (
    LedgerEntryExistsError,
    LedgerEntryNotFoundError,
    LedgerNotOwnerError,
)
from core.infrastructure.database import lock_rows
from registry.infrastructure.models import OwnershipRecord
from registry.ports.ownership_ledger import OwnershipLedger


class DjangoOwnershipLedger(OwnershipLedger):
    """
    Django ORM implementation of OwnershipLedger.

    Database errors on insert are translated into ledger exceptions so
    the registry sees the same failures as with any other ledger.
    """

    def create(self, license_id: int, owner: str) -> None:
        """
        Create an ownership entry.

        Args:
            license_id: License ID
            owner: Initial owner identity
        """
        if OwnershipRecord.objects.filter(license_id=license_id).exists():
            raise LedgerEntryExistsError(f"License {license_id} already has an owner")
        try:
            with transaction.atomic():
                OwnershipRecord.objects.create(license_id=license_id, owner=owner)
        except IntegrityError as exc:
            raise LedgerEntryExistsError(f"License {license_id} already has an owner") from exc

    def destroy(self, license_id: int, expected_owner: str) -> None:
        """
        Destroy an ownership entry.

        Args:
            license_id: License ID
            expected_owner: Identity that must currently own the entry
        """
        record = lock_rows(OwnershipRecord.objects.filter(license_id=license_id)).first()
        if record is None:
            raise LedgerEntryNotFoundError(f"License {license_id} has no owner")
        if record.owner != expected_owner:
            raise LedgerNotOwnerError(f"{expected_owner!r} does not own license {license_id}")
        record.delete()

    def reassign(self, license_id: int, from_owner: str, to_owner: str) -> None:
        """
        Move an ownership entry to a new owner.

        Args:
            license_id: License ID
            from_owner: Current owner identity
            to_owner: New owner identity
        """
        updated = OwnershipRecord.objects.filter(license_id=license_id, owner=from_owner).update(
            owner=to_owner
        )
        if updated == 0:
            raise LedgerEntryNotFoundError(
                f"License {license_id} is not owned by {from_owner!r}"
            )

    def owner_of(self, license_id: int) -> Optional[str]:
        """
        Look up the current owner.

        Args:
            license_id: License ID

        Returns:
            Owner identity or None
        """
        return (
            OwnershipRecord.objects.filter(license_id=license_id)
            .values_list("owner", flat=True)
            .first()
        )
