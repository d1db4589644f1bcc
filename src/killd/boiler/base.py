"""Abstract base class for the physical boiler driver.

The driver owns the boiler state. The command processor and status
reporter only call through this interface and never keep a copy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from killd.domain.models import BoilerState


class BoilerDriver(ABC):
    """Interface to the boiler hardware (relay and temperature sensor)."""

    @abstractmethod
    def turn_on(self) -> None:
        """Switch the boiler on.

        Raises:
            BoilerDriverError: If the hardware refuses the change.
        """
        ...

    @abstractmethod
    def turn_off(self) -> None:
        """Switch the boiler off."""
        ...

    @abstractmethod
    def set_target(self, temperature: int) -> None:
        """Set the target temperature in degrees Celsius.

        The caller has already checked the value against the allowed
        range.
        """
        ...

    @abstractmethod
    def get_target(self) -> int:
        ...

    @abstractmethod
    def get_current(self) -> int:
        """Return the measured water temperature in degrees Celsius."""
        ...

    @abstractmethod
    def get_is_on(self) -> bool:
        ...

    @abstractmethod
    def get_minimum(self) -> int:
        """Return the lowest target temperature the boiler accepts."""
        ...

    def state(self) -> BoilerState:
        """Read all values into a single BoilerState."""
        return BoilerState(
            is_on=self.get_is_on(),
            target_temperature=self.get_target(),
            current_temperature=self.get_current(),
            minimum_temperature=self.get_minimum(),
        )

    def close(self) -> None:
        """Release hardware resources. Safe to call multiple times."""


class BoilerDriverError(Exception):
    """Raised when the boiler hardware cannot be driven or read."""
