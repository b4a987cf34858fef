"""
Django implementation of RevocationLedger port.
"""
from registry.infrastructure.models import LicenseRevocation
from registry.ports.revocation_ledger import RevocationLedger


class DjangoRevocationLedger(RevocationLedger):
    """Django ORM implementation of RevocationLedger."""

    def is_revoked(self, license_id: int) -> bool:
        """
        Check if a license has been revoked.

        Args:
            license_id: License ID

        Returns:
            True if a revocation row exists
        """
        return LicenseRevocation.objects.filter(license_id=license_id).exists()

    def mark_revoked(self, license_id: int) -> None:
        """
        Mark a license as revoked.

        Args:
            license_id: License ID
        """
        LicenseRevocation.objects.get_or_create(license_id=license_id)
