"""Domain models for killd.

This package contains the core data structures and value objects used
throughout the control plane. All models use Pydantic v2 for validation
and serialization.
"""

from killd.domain.models import (
    BoilerState,
    Command,
    CommandKind,
    DeviceIdentity,
    ProvisioningRecord,
    SetTemperature,
    StatusSnapshot,
    TurnOff,
    TurnOn,
)

__all__ = [
    "BoilerState",
    "Command",
    "CommandKind",
    "DeviceIdentity",
    "ProvisioningRecord",
    "SetTemperature",
    "StatusSnapshot",
    "TurnOff",
    "TurnOn",
]
