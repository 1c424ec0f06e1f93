"""
Driver interface.

The narrow surface the device query pipeline needs from an accelerator
driver. ``CudaDriver`` implements it over the CUDA driver API; tests supply
an in-memory fake.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, Union

from ..enums.attributes import DeviceAttribute

__all__ = [
    "AttributeValue",
    "DeviceHandle",
    "DriverInterface",
    "UNSUPPORTED",
    "Unsupported",
    "as_flag",
    "is_supported",
]

DeviceHandle = Any


class Unsupported(Enum):
    """Marker for an attribute the device/driver combination does not report."""

    TOKEN = "N/A"

    def __repr__(self) -> str:
        return "UNSUPPORTED"

    def __str__(self) -> str:
        return self.value

    def __bool__(self) -> bool:
        return False


UNSUPPORTED = Unsupported.TOKEN

# Result of a single attribute query: an integer or the UNSUPPORTED marker.
AttributeValue = Union[int, Unsupported]


def is_supported(value: AttributeValue) -> bool:
    return value is not UNSUPPORTED


def as_flag(value: AttributeValue) -> bool | Unsupported:
    """Interpret an integer attribute as a boolean, keeping UNSUPPORTED."""
    if value is UNSUPPORTED:
        return UNSUPPORTED
    return value != 0


class DriverInterface(Protocol):
    """Accelerator driver surface consumed by ``DriverSession``."""

    def initialize(self) -> None:
        """Load and initialize the driver. Raises ``DriverInitError``."""
        ...

    def shutdown(self) -> None:
        """Release driver resources acquired by ``initialize``."""
        ...

    def driver_version(self) -> int:
        """Raw driver version, e.g. ``12040`` for 12.4."""
        ...

    def device_count(self) -> int: ...

    def get_device(self, index: int) -> DeviceHandle: ...

    def device_name(self, handle: DeviceHandle) -> str: ...

    def total_memory(self, handle: DeviceHandle) -> int: ...

    def query_attribute(
        self, handle: DeviceHandle, attribute: DeviceAttribute
    ) -> AttributeValue:
        """
        Query one integer attribute.

        Returns ``UNSUPPORTED`` when the device or driver does not report the
        attribute; raises ``QueryFailedError`` for any other failure.
        """
        ...

    def can_access_peer(self, handle: DeviceHandle, peer: DeviceHandle) -> bool: ...
