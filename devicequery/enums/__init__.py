"""Enums for the device query tool."""

from .attributes import DeviceAttribute
from .compute_mode import ComputeMode

__all__ = [
    "DeviceAttribute",
    "ComputeMode",
]
