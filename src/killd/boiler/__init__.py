"""Boiler driver module for killd.

Public API:
    BoilerDriver -- Abstract base class
    SimulatedBoilerDriver -- In-memory boiler for development and tests
    GpioBoilerDriver -- gpiozero relay + 1-wire sensor (requires killd[pi])
"""

from killd.boiler.base import BoilerDriver, BoilerDriverError
from killd.boiler.simulated import SimulatedBoilerDriver

__all__ = ["BoilerDriver", "BoilerDriverError", "SimulatedBoilerDriver", "GpioBoilerDriver"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "GpioBoilerDriver":
        from killd.boiler.gpio import GpioBoilerDriver
        return GpioBoilerDriver
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
