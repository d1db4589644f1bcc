"""JSON file credential store.

Writes the provisioning record to a single JSON file. Writes go to a
temporary sibling first and are moved into place, so a power cut never
leaves a half-written file behind. A file that fails validation counts
as no record at all.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from killd.domain.models import ProvisioningRecord
from killd.storage.base import CredentialStore, CredentialStoreError

logger = logging.getLogger(__name__)


class JsonFileCredentialStore(CredentialStore):
    """Stores the ProvisioningRecord at ``path`` as JSON (mode 0600)."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def has_record(self) -> bool:
        return self.read() is not None

    def read(self) -> ProvisioningRecord | None:
        if not self._path.exists():
            return None
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
            return ProvisioningRecord.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable credential file %s: %s", self._path, e)
            return None

    def write(self, record: ProvisioningRecord) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(str(tmp_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(record.model_dump(by_alias=True), f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise CredentialStoreError(
                f"Cannot write credentials to {self._path}: {e}"
            ) from e
        logger.info("Credentials written to %s", self._path)

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise CredentialStoreError(
                f"Cannot remove credentials at {self._path}: {e}"
            ) from e
        logger.info("Credentials cleared from %s", self._path)
