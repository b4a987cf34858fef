"""
Ownership ledger port (interface).

The ownership ledger assigns each license ID an exclusive current
owner. Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Optional


class OwnershipLedger(ABC):
    """
    Abstract unique-ownership ledger.

    This is a port in hexagonal architecture - the registry consumes
    it as a capability and does not care how ownership is recorded.
    Lookups of unknown or destroyed IDs return None rather than raising.
    """

    @abstractmethod
    def create(self, license_id: int, owner: str) -> None:
        """
        Create an ownership entry.

        Args:
            license_id: License ID
            owner: Initial owner identity

        Raises:
            LedgerEntryExistsError: If the ID already has an entry
        """
        pass

    @abstractmethod
    def destroy(self, license_id: int, expected_owner: str) -> None:
        """
        Destroy an ownership entry.

        Args:
            license_id: License ID
            expected_owner: Identity that must currently own the entry

        Raises:
            LedgerEntryNotFoundError: If the ID has no entry
            LedgerNotOwnerError: If expected_owner is not the owner
        """
        pass

    @abstractmethod
    def reassign(self, license_id: int, from_owner: str, to_owner: str) -> None:
        """
        Move an ownership entry to a new owner.

        Args:
            license_id: License ID
            from_owner: Current owner identity
            to_owner: New owner identity

        Raises:
            LedgerEntryNotFoundError: If no entry is owned by from_owner
        """
        pass

    @abstractmethod
    def owner_of(self, license_id: int) -> Optional[str]:
        """
        Look up the current owner.

        Args:
            license_id: License ID

        Returns:
            Owner identity or None if the ID has no entry
        """
        pass
