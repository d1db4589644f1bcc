"""In-process stand-in for the radio, for development and tests."""

from __future__ import annotations

import logging

from killd.network.base import NetworkProvider

logger = logging.getLogger(__name__)


class SimulatedNetworkProvider(NetworkProvider):
    def __init__(self, ap_address: str = "192.168.39.12", station_address: str | None = None) -> None:
        super().__init__()
        self.ap_address = ap_address
        self.station_address = station_address
        self.access_point: str | None = None

    def start_access_point(self, name: str) -> None:
        self.access_point = name
        logger.info("Simulated Access Point %s started at %s", name, self.ap_address)

    def stop(self) -> None:
        if self.access_point is not None:
            logger.info("Simulated Access Point %s stopped", self.access_point)
        self.access_point = None

    def current_local_address(self) -> str:
        return self.station_address or self.ap_address

    def simulate_station(self, mac: str, connected: bool = True) -> None:
        """Deliver a client connect/disconnect event to listeners."""
        self._notify(mac, connected)
