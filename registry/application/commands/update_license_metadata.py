"""
UpdateLicenseMetadataCommand.

Command to replace the metadata of a license.
"""
from dataclasses import dataclass


@dataclass
class UpdateLicenseMetadataCommand:
    """Command to replace license metadata."""

    caller: str
    license_id: int
    metadata: str
