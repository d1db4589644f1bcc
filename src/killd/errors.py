"""Errors raised by the control plane while handling a request.

Every ``ControlError`` is local and recoverable: the HTTP layer turns it
into a 400 response carrying ``{"error": message}``. Collaborator
failures (network, storage, boiler hardware) use their own exception
types and are not caught here.
"""

from __future__ import annotations


class ControlError(Exception):
    """Base class for user-visible request failures."""

    default_message = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NoData(ControlError):
    """The request body was empty."""

    default_message = "No Data"


class InvalidData(ControlError):
    """The request body was not a single JSON object."""

    default_message = "Invalid Data"


class AlreadyProvisioned(ControlError):
    """Setup was attempted on a device that already holds credentials."""

    default_message = "KiLL already setup."


class MissingFields(ControlError):
    """Setup payload lacked one of ssid, password or appId."""

    default_message = "Missing Data"


class AuthenticationFailed(ControlError):
    """The proof-of-possession field was absent or wrong."""

    default_message = "Missing authentication"


class InvalidTemperature(ControlError):
    """A set_temperature value was not an integer."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid temperature {value}")


class OutOfRangeTemperature(ControlError):
    """A set_temperature value fell outside the allowed range."""

    def __init__(self, value: int, minimum: int, maximum: int) -> None:
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"Temperature {value} out of range")


class StartupError(Exception):
    """Raised when the device cannot finish bringing up its services."""
