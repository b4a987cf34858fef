"""
Revocation ledger port (interface).

Revocation is monotonic: once a license is marked revoked it stays so.
"""
from abc import ABC, abstractmethod


class RevocationLedger(ABC):
    """Abstract ledger of revoked license IDs."""

    @abstractmethod
    def is_revoked(self, license_id: int) -> bool:
        """
        Check if a license has been revoked.

        Args:
            license_id: License ID

        Returns:
            True if revoked, False otherwise (including unknown IDs)
        """
        pass

    @abstractmethod
    def mark_revoked(self, license_id: int) -> None:
        """
        Mark a license as revoked. Marking twice is a no-op.

        Args:
            license_id: License ID
        """
        pass
