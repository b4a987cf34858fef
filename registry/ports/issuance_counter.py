"""
Issuance counter port (interface).

Holds the last issued license ID. It only moves forward, one step at a
time, as licenses are issued.
"""
from abc import ABC, abstractmethod


class IssuanceCounter(ABC):
    """Abstract last-issued-id counter."""

    @abstractmethod
    def current(self) -> int:
        """
        Get the last issued license ID.

        Returns:
            Last issued ID, 0 if nothing has been issued
        """
        pass

    @abstractmethod
    def advance(self, license_id: int) -> None:
        """
        Record that license_id has been issued.

        Args:
            license_id: Newly issued ID, must be current() + 1

        Raises:
            LicenseExistsError: If license_id is not the next ID
        """
        pass
