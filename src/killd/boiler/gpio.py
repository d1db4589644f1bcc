"""Boiler driver for a relay on a GPIO pin and a DS18B20 sensor.

The relay is driven with gpiozero; the water temperature comes from the
kernel 1-wire driver, which exposes it in millidegrees Celsius through
a sysfs file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from killd.boiler.base import BoilerDriver, BoilerDriverError

logger = logging.getLogger(__name__)


class GpioBoilerDriver(BoilerDriver):
    """Drives the boiler relay and reads the water temperature.

    The target temperature is held in memory; the boiler's own
    thermostat is wired to the relay.
    """

    def __init__(
        self,
        relay_pin: int = 17,
        sensor_path: str | Path = "/sys/bus/w1/devices/28-000000000000/temperature",
        minimum_temperature: int = 30,
        target_temperature: int | None = None,
        relay: object | None = None,
    ) -> None:
        if relay is None:
            try:
                from gpiozero import OutputDevice
            except ImportError as e:
                raise BoilerDriverError(
                    "gpiozero is required for the gpio boiler backend (pip install killd[pi])"
                ) from e
            try:
                relay = OutputDevice(relay_pin, active_high=True, initial_value=False)
            except Exception as e:
                raise BoilerDriverError(f"Cannot claim relay pin {relay_pin}: {e}") from e
            logger.info("Boiler relay on GPIO %d", relay_pin)
        self._relay = relay
        self._sensor_path = Path(sensor_path)
        self._minimum = minimum_temperature
        self._target = target_temperature if target_temperature is not None else minimum_temperature
        self._last_reading: int | None = None

    def turn_on(self) -> None:
        self._relay.on()
        logger.info("Boiler relay energized")

    def turn_off(self) -> None:
        self._relay.off()
        logger.info("Boiler relay released")

    def set_target(self, temperature: int) -> None:
        self._target = temperature

    def get_target(self) -> int:
        return self._target

    def get_current(self) -> int:
        try:
            raw = self._sensor_path.read_text().strip()
            self._last_reading = round(int(raw) / 1000)
        except (OSError, ValueError) as e:
            if self._last_reading is None:
                raise BoilerDriverError(
                    f"Cannot read temperature from {self._sensor_path}: {e}"
                ) from e
            logger.warning("Temperature read failed, reusing last value: %s", e)
        return self._last_reading

    def get_is_on(self) -> bool:
        return bool(self._relay.value)

    def get_minimum(self) -> int:
        return self._minimum

    def close(self) -> None:
        if self._relay is not None:
            self._relay.off()
            self._relay.close()
            self._relay = None
