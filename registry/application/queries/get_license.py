"""
GetLicenseQuery.

Query to get a license snapshot and its status flags.
"""
from dataclasses import dataclass


@dataclass
class GetLicenseQuery:
    """Query to get a license by ID."""

    license_id: int
