"""
Unit tests for License entity.
"""
import pytest

from core.domain.value_objects import LicenseStatus
from registry.domain.license import License


class TestLicense:
    """Tests for License entity."""

    def test_valid_license(self):
        """Test a held, unrevoked license."""
        license = License(id=1, holder="alice", metadata="tier=gold")

        assert license.is_valid()
        assert license.status == LicenseStatus.VALID
        assert license.is_held_by("alice")
        assert not license.is_held_by("bob")

    def test_revoked_license(self):
        """Test a revoked license has no holder."""
        license = License(id=3, holder=None, metadata="tier=gold", revoked=True)

        assert not license.is_valid()
        assert license.status == LicenseStatus.REVOKED
        assert not license.is_held_by("alice")

    @pytest.mark.parametrize("license_id", [0, -1, True, "1"])
    def test_invalid_id(self, license_id):
        """Test license IDs must be positive integers."""
        with pytest.raises(ValueError, match="positive integer"):
            License(id=license_id, holder="alice", metadata="x")

    def test_empty_metadata(self):
        """Test metadata is required."""
        with pytest.raises(ValueError, match="metadata"):
            License(id=1, holder="alice", metadata="")

    def test_revoked_with_holder(self):
        """Test a revoked license cannot keep a holder."""
        with pytest.raises(ValueError, match="revoked"):
            License(id=1, holder="alice", metadata="x", revoked=True)

    def test_immutable(self):
        """Test license snapshots cannot be changed."""
        license = License(id=1, holder="alice", metadata="x")
        with pytest.raises(AttributeError):
            license.holder = "bob"
