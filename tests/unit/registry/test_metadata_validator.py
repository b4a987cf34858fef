"""
Unit tests for MetadataValidator and AuthorizationGate.
"""
import pytest

from core.domain.exceptions import (
    EmptyMetadataError,
    InvalidMetadataError,
    LicenseNotFoundError,
    UnauthorizedError,
)
from registry.domain.services import MAX_METADATA_LENGTH, AuthorizationGate, MetadataValidator
from registry.infrastructure.repositories.in_memory import InMemoryOwnershipLedger


class TestMetadataValidator:
    """Tests for MetadataValidator."""

    @pytest.mark.parametrize("metadata", ["x", "tier=gold", "a" * MAX_METADATA_LENGTH, " "])
    def test_valid_metadata(self, metadata):
        """Test metadata within bounds."""
        assert MetadataValidator.validate(metadata) == (True, None)
        MetadataValidator.ensure_valid(metadata)

    def test_empty_metadata(self):
        """Test empty metadata raises the empty-specific error."""
        is_valid, error = MetadataValidator.validate("")
        assert not is_valid
        assert "empty" in error

        with pytest.raises(EmptyMetadataError) as exc_info:
            MetadataValidator.ensure_valid("")
        assert exc_info.value.code == "EMPTY_METADATA"

    def test_empty_metadata_is_invalid_metadata(self):
        """Test callers catching InvalidMetadataError also catch empty metadata."""
        with pytest.raises(InvalidMetadataError):
            MetadataValidator.ensure_valid("")

    def test_too_long_metadata(self):
        """Test metadata above the limit."""
        with pytest.raises(InvalidMetadataError) as exc_info:
            MetadataValidator.ensure_valid("a" * (MAX_METADATA_LENGTH + 1))
        assert exc_info.value.code == "INVALID_METADATA"
        assert not isinstance(exc_info.value, EmptyMetadataError)

    @pytest.mark.parametrize("metadata", [None, 42, b"bytes", ["x"]])
    def test_non_text_metadata(self, metadata):
        """Test metadata must be text."""
        with pytest.raises(InvalidMetadataError, match="text"):
            MetadataValidator.ensure_valid(metadata)


class TestAuthorizationGate:
    """Tests for AuthorizationGate."""

    @pytest.fixture
    def ledger(self):
        ledger = InMemoryOwnershipLedger()
        ledger.create(1, "alice")
        return ledger

    def test_administrator(self, ledger):
        """Test administrator role check."""
        gate = AuthorizationGate("admin", ledger)

        assert gate.is_administrator("admin")
        assert not gate.is_administrator("alice")
        assert not gate.is_administrator(None)
        gate.require_administrator("admin")
        with pytest.raises(UnauthorizedError):
            gate.require_administrator("alice")

    def test_require_holder(self, ledger):
        """Test holder check returns the holder."""
        gate = AuthorizationGate("admin", ledger)

        assert gate.require_holder("alice", 1) == "alice"

    def test_require_holder_wrong_caller(self, ledger):
        """Test holder check rejects other callers, the administrator included."""
        gate = AuthorizationGate("admin", ledger)

        with pytest.raises(UnauthorizedError):
            gate.require_holder("admin", 1)

    def test_require_holder_unknown_license(self, ledger):
        """Test holder check on a license with no owner."""
        gate = AuthorizationGate("admin", ledger)

        with pytest.raises(LicenseNotFoundError):
            gate.require_holder("alice", 2)
