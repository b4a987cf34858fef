"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class RegistryException(DomainException):
    """Base exception for license registry errors."""

    pass


class UnauthorizedError(RegistryException):
    """Raised when the caller does not hold the role an operation requires."""

    def __init__(self, message: str = "Caller is not authorized"):
        super().__init__(message, code="UNAUTHORIZED")


class LicenseExistsError(RegistryException):
    """Raised when a license ID is already taken."""

    def __init__(self, message: str = "License already exists"):
        super().__init__(message, code="LICENSE_EXISTS")


class LicenseNotFoundError(RegistryException):
    """Raised when a license has no current holder."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class InvalidLicenseIdError(RegistryException):
    """Raised when a license ID is not a positive integer."""

    def __init__(self, message: str = "Invalid license ID"):
        super().__init__(message, code="INVALID_LICENSE_ID")


class InvalidMetadataError(RegistryException):
    """Raised when license metadata is outside the allowed bounds."""

    def __init__(self, message: str = "Invalid license metadata", code: str = "INVALID_METADATA"):
        super().__init__(message, code=code)


class EmptyMetadataError(InvalidMetadataError):
    """Raised when license metadata is empty."""

    def __init__(self, message: str = "License metadata cannot be empty"):
        super().__init__(message, code="EMPTY_METADATA")


class LicenseRevokedError(RegistryException):
    """Raised when an operation targets a revoked license."""

    def __init__(self, message: str = "License is revoked"):
        super().__init__(message, code="LICENSE_REVOKED")


class LicenseAlreadyRevokedError(RegistryException):
    """Raised when revoking a license twice."""

    def __init__(self, message: str = "License is already revoked"):
        super().__init__(message, code="LICENSE_ALREADY_REVOKED")


class BatchLimitExceededError(RegistryException):
    """Raised when a batch issuance exceeds the maximum batch size."""

    def __init__(self, message: str = "Batch limit exceeded"):
        super().__init__(message, code="BATCH_LIMIT_EXCEEDED")


class LedgerException(DomainException):
    """Base exception for ownership ledger failures."""

    pass


class LedgerEntryExistsError(LedgerException):
    """Raised when creating an ownership entry that already exists."""

    def __init__(self, message: str = "Ownership entry already exists"):
        super().__init__(message, code="LEDGER_ENTRY_EXISTS")


class LedgerEntryNotFoundError(LedgerException):
    """Raised when an ownership entry does not exist."""

    def __init__(self, message: str = "Ownership entry not found"):
        super().__init__(message, code="LEDGER_ENTRY_NOT_FOUND")


class LedgerNotOwnerError(LedgerException):
    """Raised when the expected owner does not match the ledger."""

    def __init__(self, message: str = "Identity does not own the ledger entry"):
        super().__init__(message, code="LEDGER_NOT_OWNER")
