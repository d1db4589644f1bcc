"""In-memory credential store for development and tests."""

from __future__ import annotations

import logging

from killd.domain.models import ProvisioningRecord
from killd.storage.base import CredentialStore

logger = logging.getLogger(__name__)


class MemoryCredentialStore(CredentialStore):
    """Keeps the record in process memory; lost on restart."""

    def __init__(self, record: ProvisioningRecord | None = None) -> None:
        self._record = record

    def has_record(self) -> bool:
        return self._record is not None

    def read(self) -> ProvisioningRecord | None:
        return self._record

    def write(self, record: ProvisioningRecord) -> None:
        self._record = record
        logger.debug("Stored credentials for SSID %s in memory", record.ssid)

    def clear(self) -> None:
        self._record = None
