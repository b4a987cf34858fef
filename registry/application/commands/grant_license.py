"""
GrantLicenseCommand.

Command to issue a single license.
"""
from dataclasses import dataclass


@dataclass
class GrantLicenseCommand:
    """Command to issue one license held by the administrator."""

    caller: str
    metadata: str
