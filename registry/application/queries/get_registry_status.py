"""
GetRegistryStatusQuery.

Query to get registry-wide counters for a caller.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class GetRegistryStatusQuery:
    """Query to get total issued licenses and the caller's role."""

    caller: Optional[str] = None
