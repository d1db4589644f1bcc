"""Abstract base class for persistent credential storage.

The provisioning gate only decides *whether* to write or clear the
record; how and where it is kept is up to the store implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from killd.domain.models import ProvisioningRecord


class CredentialStore(ABC):
    """Non-volatile home of the single ProvisioningRecord."""

    @abstractmethod
    def has_record(self) -> bool:
        """Return True if a valid record is stored."""
        ...

    @abstractmethod
    def read(self) -> ProvisioningRecord | None:
        """Return the stored record, or None when there is none."""
        ...

    @abstractmethod
    def write(self, record: ProvisioningRecord) -> None:
        """Persist ``record``, replacing any previous one.

        Raises:
            CredentialStoreError: If the record cannot be written.
        """
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored record. Safe to call when none exists."""
        ...


class CredentialStoreError(Exception):
    """Raised when the credential store cannot be read or written."""
