"""Simulated boiler for development machines and tests.

The water temperature drifts one degree towards the target (when on) or
towards ambient (when off) every time it is read, which is enough to
watch the status endpoint move without any hardware.
"""

from __future__ import annotations

import logging

from killd.boiler.base import BoilerDriver

logger = logging.getLogger(__name__)

DEFAULT_AMBIENT_TEMPERATURE = 20


class SimulatedBoilerDriver(BoilerDriver):
    def __init__(
        self,
        minimum_temperature: int = 30,
        target_temperature: int | None = None,
        current_temperature: int = DEFAULT_AMBIENT_TEMPERATURE,
        ambient_temperature: int = DEFAULT_AMBIENT_TEMPERATURE,
        drift: bool = True,
    ) -> None:
        self._minimum = minimum_temperature
        self._target = target_temperature if target_temperature is not None else minimum_temperature
        self._current = current_temperature
        self._ambient = ambient_temperature
        self._drift = drift
        self._is_on = False

    def turn_on(self) -> None:
        self._is_on = True
        logger.info("Simulated boiler on")

    def turn_off(self) -> None:
        self._is_on = False
        logger.info("Simulated boiler off")

    def set_target(self, temperature: int) -> None:
        self._target = temperature
        logger.info("Simulated boiler target set to %d", temperature)

    def get_target(self) -> int:
        return self._target

    def get_current(self) -> int:
        if self._drift:
            goal = self._target if self._is_on else self._ambient
            if self._current < goal:
                self._current += 1
            elif self._current > goal:
                self._current -= 1
        return self._current

    def get_is_on(self) -> bool:
        return self._is_on

    def get_minimum(self) -> int:
        return self._minimum
