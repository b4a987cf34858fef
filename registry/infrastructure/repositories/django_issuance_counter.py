"""
Django implementation of IssuanceCounter port.

The counter lives on the RegistryState singleton row, which also pins
the registry administrator chosen on first deployment.
"""
import logging

from core.domain.exceptions import LicenseExistsError
from core.infrastructure.database import lock_rows
from registry.infrastructure.models import REGISTRY_STATE_ID, RegistryState
from registry.ports.issuance_counter import IssuanceCounter

logger = logging.getLogger(__name__)


def initialize_registry_state(administrator: str) -> RegistryState:
    """
    Load the registry state, creating it on first deployment.

    Args:
        administrator: Administrator identity used if the registry is new

    Returns:
        RegistryState row; its administrator is never changed afterwards
    """
    state, created = RegistryState.objects.get_or_create(
        id=REGISTRY_STATE_ID,
        defaults={"administrator": administrator, "last_issued_id": 0},
    )
    if created:
        logger.info("Initialized license registry for administrator %s", administrator)
    elif state.administrator != administrator:
        logger.warning(
            "Ignoring configured administrator %s; registry is administered by %s",
            administrator,
            state.administrator,
        )
    return state


class DjangoIssuanceCounter(IssuanceCounter):
    """
    Django ORM implementation of IssuanceCounter.

    Inside a transaction current() locks the state row until the
    issuing operation commits.
    """

    def _state(self) -> RegistryState:
        try:
            return lock_rows(RegistryState.objects.all()).get(id=REGISTRY_STATE_ID)
        except RegistryState.DoesNotExist as exc:
            raise RuntimeError("License registry has not been initialized") from exc

    def current(self) -> int:
        """
        Get the last issued license ID.

        Returns:
            Last issued ID
        """
        return self._state().last_issued_id

    def advance(self, license_id: int) -> None:
        """
        Record that license_id has been issued.

        Args:
            license_id: Newly issued ID
        """
        updated = RegistryState.objects.filter(
            id=REGISTRY_STATE_ID, last_issued_id=license_id - 1
        ).update(last_issued_id=license_id)
        if updated == 0:
            raise LicenseExistsError(f"License {license_id} is not the next ID to issue")
