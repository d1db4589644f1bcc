"""Command dispatch for ``POST /command``.

Parses the ``command`` field into a closed set of command types and
applies it to the boiler. Unknown commands are accepted as a no-op so
older or newer companion apps never get an error for them.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from killd.boiler.base import BoilerDriver
from killd.display import Display
from killd.domain.models import Command, CommandKind, SetTemperature, TurnOff, TurnOn
from killd.errors import InvalidTemperature, OutOfRangeTemperature

logger = logging.getLogger(__name__)

_command_adapter: TypeAdapter[Command] = TypeAdapter(Command)

_KNOWN_COMMANDS = {kind.value for kind in CommandKind}


class CommandProcessor:
    """Validates commands and applies them to the boiler and display."""

    def __init__(self, boiler: BoilerDriver, display: Display, maximum_temperature: int) -> None:
        self._boiler = boiler
        self._display = display
        self._maximum_temperature = maximum_temperature

    @property
    def maximum_temperature(self) -> int:
        return self._maximum_temperature

    def parse(self, document: dict[str, Any]) -> Command | None:
        """Turn a request document into a Command, or None if unrecognized.

        Raises:
            InvalidTemperature: set_temperature without an integer value.
        """
        name = document.get("command")
        if not isinstance(name, str) or name not in _KNOWN_COMMANDS:
            logger.info("Ignoring unknown command %r", name)
            return None
        try:
            return _command_adapter.validate_python(
                {"command": name, "value": document.get("value")}
                if name == CommandKind.SET_TEMPERATURE.value
                else {"command": name}
            )
        except ValidationError as e:
            logger.warning("Invalid temperature value %r: %s", document.get("value"), e)
            raise InvalidTemperature(document.get("value")) from e

    def execute(self, command: Command | None) -> None:
        if isinstance(command, TurnOn):
            self._boiler.turn_on()
            logger.info("Boiler turned on")
        elif isinstance(command, TurnOff):
            self._boiler.turn_off()
            logger.info("Boiler turned off")
        elif isinstance(command, SetTemperature):
            self._set_temperature(command.value)

    def dispatch(self, document: dict[str, Any]) -> None:
        self.execute(self.parse(document))

    def _set_temperature(self, temperature: int) -> None:
        logger.info("Setting temperature to %d", temperature)
        minimum = self._boiler.get_minimum()
        if temperature < minimum or temperature > self._maximum_temperature:
            logger.warning(
                "Temperature %d outside %d..%d", temperature, minimum, self._maximum_temperature
            )
            raise OutOfRangeTemperature(temperature, minimum, self._maximum_temperature)

        self._boiler.set_target(temperature)
        self._display.show_target(temperature)
