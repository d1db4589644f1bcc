"""Read-only device status for ``POST /status``."""

from __future__ import annotations

from killd.boiler.base import BoilerDriver
from killd.domain.models import StatusSnapshot
from killd.network.base import NetworkProvider


class StatusReporter:
    def __init__(self, boiler: BoilerDriver, network: NetworkProvider) -> None:
        self._boiler = boiler
        self._network = network

    def snapshot(self) -> StatusSnapshot:
        """Read boiler and network state as it is right now."""
        state = self._boiler.state()
        return StatusSnapshot(
            target_temperature=state.target_temperature,
            current_temperature=state.current_temperature,
            is_on=state.is_on,
            local_ip=self._network.current_local_address(),
            minimum_temperature=state.minimum_temperature,
        )
