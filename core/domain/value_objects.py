"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum

MAX_IDENTITY_LENGTH = 255


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Identity(ValueObject):
    """Caller or holder identity as supplied by the host."""

    value: str

    def __post_init__(self):
        """Validate identity format."""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Identity cannot be empty")
        if self.value != self.value.strip():
            raise ValueError("Identity cannot have surrounding whitespace")
        if len(self.value) > MAX_IDENTITY_LENGTH:
            raise ValueError("Identity too long")

    def __str__(self) -> str:
        """Return identity as string."""
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    VALID = "valid"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value
