"""Driver error taxonomy for the device query pipeline."""

from __future__ import annotations

from typing import Any


class DriverError(Exception):
    """Base class for failures reported by the accelerator driver."""

    def __init__(self, message: str, status: str | None = None) -> None:
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        message = super().__str__()
        if self.status:
            return f"{message} ({self.status})"
        return message


class DriverInitError(DriverError):
    """The driver could not be loaded or initialized."""


class NoSuchDeviceError(DriverError):
    """A device index fell outside the range reported by the driver."""

    def __init__(self, index: int, device_count: int) -> None:
        super().__init__(
            f"Device index {index} out of range (driver reports {device_count} device(s))"
        )
        self.index = index
        self.device_count = device_count


class QueryFailedError(DriverError):
    """A capability query failed for a reason other than being unsupported."""

    def __init__(self, attribute: Any, status: str | None = None) -> None:
        name = getattr(attribute, "name", str(attribute))
        super().__init__(f"Query for attribute {name} failed", status)
        self.attribute = attribute
