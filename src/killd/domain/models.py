"""Core domain models for the killd control plane.

These models represent the data flowing through the device: its
hardware identity, the provisioning record written once by setup, the
boiler state read from the driver, the closed set of commands the
companion app may send, and the status snapshot returned to it.
"""

from __future__ import annotations

import enum
import uuid
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Prefix shared by the access point name and the mDNS hostname
DEVICE_NAME_PREFIX = "KiLL"


# ---------------------------------------------------------------------------
# Identity / Provisioning
# ---------------------------------------------------------------------------


class DeviceIdentity(BaseModel):
    """Opaque hardware-derived identifier of this device.

    Created at boot and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    device_id: str = Field(min_length=1, description="MAC-derived identifier")

    @classmethod
    def from_hardware(cls) -> DeviceIdentity:
        """Build the identity from the primary network interface MAC."""
        return cls(device_id=f"{uuid.getnode():012X}")

    @property
    def ssid(self) -> str:
        """Name of the local access point."""
        return f"{DEVICE_NAME_PREFIX}-{self.device_id}"

    @property
    def hostname(self) -> str:
        """mDNS hostname, without the ``.local`` suffix."""
        return f"{DEVICE_NAME_PREFIX}-{self.device_id}"

    @property
    def url(self) -> str:
        return f"http://{self.hostname}.local/"


class ProvisioningRecord(BaseModel):
    """Network and app credentials handed over by the companion app."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ssid: str = Field(min_length=1)
    password: str = Field(min_length=1)
    app_id: str = Field(min_length=1, alias="appId")


# ---------------------------------------------------------------------------
# Boiler / Status
# ---------------------------------------------------------------------------


class BoilerState(BaseModel):
    """Point-in-time view of the boiler, as reported by its driver."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_on: bool = Field(alias="isOn")
    target_temperature: int = Field(alias="targetTemperature")
    current_temperature: int = Field(alias="currentTemperature")
    minimum_temperature: int = Field(alias="minimumTemperature")


class StatusSnapshot(BaseModel):
    """Payload returned by ``POST /status``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    target_temperature: int = Field(alias="targetTemperature")
    current_temperature: int = Field(alias="currentTemperature")
    is_on: bool = Field(alias="isOn")
    local_ip: str = Field(alias="localIP")
    minimum_temperature: int = Field(alias="minimumTemperature")


# ---------------------------------------------------------------------------
# Commands (discriminated union)
# ---------------------------------------------------------------------------


class CommandKind(str, enum.Enum):
    """Commands understood by ``POST /command``."""

    TURN_ON = "turn_on"
    TURN_OFF = "turn_off"
    SET_TEMPERATURE = "set_temperature"


class TurnOn(BaseModel):
    model_config = ConfigDict(frozen=True)

    command: Literal["turn_on"] = "turn_on"


class TurnOff(BaseModel):
    model_config = ConfigDict(frozen=True)

    command: Literal["turn_off"] = "turn_off"


class SetTemperature(BaseModel):
    """Change the boiler target temperature.

    ``value`` accepts an integer or a decimal string (the companion app
    sends strings); anything else is rejected rather than coerced.
    """

    model_config = ConfigDict(frozen=True)

    command: Literal["set_temperature"] = "set_temperature"
    value: int

    @field_validator("value", mode="before")
    @classmethod
    def _strict_integer(cls, raw: object) -> int:
        if isinstance(raw, bool):
            raise ValueError("boolean is not a temperature")
        if isinstance(raw, int):
            return raw
        if isinstance(raw, str):
            text = raw.strip()
            digits = text[1:] if text[:1] in ("+", "-") else text
            if digits.isascii() and digits.isdigit():
                return int(text)
        raise ValueError(f"{raw!r} is not an integer")


Command = Annotated[
    Union[TurnOn, TurnOff, SetTemperature],
    Field(discriminator="command"),
]
