"""One-time provisioning gate and factory reset."""

from __future__ import annotations

import logging
from typing import Callable

from killd.domain.models import ProvisioningRecord
from killd.errors import AlreadyProvisioned, MissingFields
from killd.storage.base import CredentialStore

logger = logging.getLogger(__name__)


class ProvisioningGate:
    """Decides whether setup may write credentials, and wipes them on reset.

    Setup is split into ``attempt_setup`` (validate) and ``commit``
    (persist) so the HTTP layer can choose whether to answer before or
    after the write.
    """

    def __init__(self, store: CredentialStore, factory_reset: Callable[[], None]) -> None:
        self._store = store
        self._factory_reset = factory_reset

    def is_provisioned(self) -> bool:
        return self._store.has_record()

    def attempt_setup(self, ssid: object, password: object, app_id: object) -> ProvisioningRecord:
        """Validate a setup request.

        Raises:
            AlreadyProvisioned: A record already exists.
            MissingFields: Any of the three values is missing or empty.
        """
        if self.is_provisioned():
            logger.warning("Tried to setup KiLL twice")
            raise AlreadyProvisioned()

        values = (ssid, password, app_id)
        if not all(isinstance(v, str) and v for v in values):
            logger.warning(
                "Missing data on setup (ssid=%s, password=%s, appId=%s)",
                bool(ssid), bool(password), bool(app_id),
            )
            raise MissingFields()

        logger.info("Received setup for SSID %s, app %s", ssid, app_id)
        return ProvisioningRecord(ssid=ssid, password=password, app_id=app_id)

    def commit(self, record: ProvisioningRecord) -> None:
        self._store.write(record)
        logger.info("Provisioning record committed")

    def reset_factory(self) -> None:
        """Clear credentials and hand over to the factory reset collaborator.

        The caller must have authenticated the request.
        """
        self._store.clear()
        self._factory_reset()
