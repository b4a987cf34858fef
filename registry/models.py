"""
Model registration for the registry app.
"""
from registry.infrastructure.models import (  # noqa: F401
    AuditLog,
    LicenseMetadata,
    LicenseRevocation,
    OwnershipRecord,
    RegistryState,
)
