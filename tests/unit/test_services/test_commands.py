"""Tests for command parsing and dispatch."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from killd.boiler.simulated import SimulatedBoilerDriver
from killd.domain.models import SetTemperature, TurnOff, TurnOn
from killd.errors import InvalidTemperature, OutOfRangeTemperature
from killd.services.commands import CommandProcessor


@pytest.fixture
def processor(boiler: SimulatedBoilerDriver, display: MagicMock) -> CommandProcessor:
    return CommandProcessor(boiler, display, maximum_temperature=90)


class TestParse:
    def test_turn_on(self, processor: CommandProcessor) -> None:
        assert processor.parse({"command": "turn_on"}) == TurnOn()

    def test_turn_off_ignores_value(self, processor: CommandProcessor) -> None:
        assert processor.parse({"command": "turn_off", "value": "x"}) == TurnOff()

    @pytest.mark.parametrize("raw, expected", [
        ("55", 55),
        (55, 55),
        (" 42 ", 42),
        ("-5", -5),
        ("+60", 60),
    ])
    def test_set_temperature_values(
        self, processor: CommandProcessor, raw: object, expected: int
    ) -> None:
        assert processor.parse({"command": "set_temperature", "value": raw}) == SetTemperature(
            value=expected
        )

    @pytest.mark.parametrize("raw", ["hot", "", "55.5", 55.5, True, None, [55], "٥٥"])
    def test_set_temperature_rejects_non_integers(
        self, processor: CommandProcessor, raw: object
    ) -> None:
        with pytest.raises(InvalidTemperature):
            processor.parse({"command": "set_temperature", "value": raw})

    def test_missing_value(self, processor: CommandProcessor) -> None:
        with pytest.raises(InvalidTemperature):
            processor.parse({"command": "set_temperature"})

    @pytest.mark.parametrize("document", [
        {}, {"command": "explode"}, {"command": 1}, {"command": None}, {"command": ["turn_on"]},
    ])
    def test_unknown_command(self, processor: CommandProcessor, document: dict) -> None:
        assert processor.parse(document) is None


class TestExecute:
    def test_turn_on_and_off(self, processor: CommandProcessor, boiler: SimulatedBoilerDriver) -> None:
        processor.execute(TurnOn())
        assert boiler.get_is_on() is True
        processor.execute(TurnOff())
        assert boiler.get_is_on() is False

    def test_none_is_noop(
        self, processor: CommandProcessor, boiler: SimulatedBoilerDriver, display: MagicMock
    ) -> None:
        processor.execute(None)
        assert boiler.get_is_on() is False
        assert boiler.get_target() == 40
        display.show_target.assert_not_called()

    @pytest.mark.parametrize("value", range(20, 101, 5))
    def test_range_check(
        self,
        processor: CommandProcessor,
        boiler: SimulatedBoilerDriver,
        display: MagicMock,
        value: int,
    ) -> None:
        if 30 <= value <= 90:
            processor.execute(SetTemperature(value=value))
            assert boiler.get_target() == value
            display.show_target.assert_called_once_with(value)
        else:
            with pytest.raises(OutOfRangeTemperature) as exc_info:
                processor.execute(SetTemperature(value=value))
            assert exc_info.value.message == f"Temperature {value} out of range"
            assert boiler.get_target() == 40
            display.show_target.assert_not_called()

    def test_minimum_read_live_from_boiler(self, display: MagicMock) -> None:
        boiler = SimulatedBoilerDriver(minimum_temperature=50, target_temperature=60, drift=False)
        processor = CommandProcessor(boiler, display, maximum_temperature=90)
        with pytest.raises(OutOfRangeTemperature):
            processor.execute(SetTemperature(value=45))

    def test_dispatch(self, processor: CommandProcessor, boiler: SimulatedBoilerDriver) -> None:
        processor.dispatch({"command": "set_temperature", "value": "70"})
        assert boiler.get_target() == 70
