"""Abstract interfaces for the radio and name-resolution collaborators.

Station connect/disconnect notifications are delivered to listeners
registered on the provider. They are informational only: nothing in
request handling depends on them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class NetworkListener(ABC):
    """Observer of access point client activity."""

    @abstractmethod
    def on_station_connected(self, mac: str) -> None:
        ...

    @abstractmethod
    def on_station_disconnected(self, mac: str) -> None:
        ...


class LoggingNetworkListener(NetworkListener):
    def on_station_connected(self, mac: str) -> None:
        logger.info("Station connected: %s", mac)

    def on_station_disconnected(self, mac: str) -> None:
        logger.info("Station disconnected: %s", mac)


class NetworkProvider(ABC):
    """Owns the local access point and knows the device's address."""

    def __init__(self) -> None:
        self._listeners: list[NetworkListener] = []

    def add_listener(self, listener: NetworkListener) -> None:
        self._listeners.append(listener)

    def _notify(self, mac: str, connected: bool) -> None:
        for listener in self._listeners:
            try:
                if connected:
                    listener.on_station_connected(mac)
                else:
                    listener.on_station_disconnected(mac)
            except Exception:
                logger.exception("Network listener %r failed", listener)

    @abstractmethod
    def start_access_point(self, name: str) -> None:
        """Bring up the open access point named ``name``.

        Raises:
            NetworkError: If the access point cannot be started.
        """
        ...

    @abstractmethod
    def stop(self) -> None:
        """Tear the access point down. Safe to call multiple times."""
        ...

    @abstractmethod
    def current_local_address(self) -> str:
        """Return the station address when joined to an external
        network, otherwise the access point address."""
        ...


class NameResolver(ABC):
    """Publishes the device hostname on the local network (mDNS)."""

    @abstractmethod
    def begin(self, hostname: str) -> bool:
        """Start answering for ``hostname``. Return False on failure."""
        ...

    def close(self) -> None:
        """Stop answering. Safe to call multiple times."""


class NetworkError(Exception):
    """Raised when the radio or access point cannot be configured."""
