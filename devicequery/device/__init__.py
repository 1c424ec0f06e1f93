"""Device discovery and capability queries for CUDA devices."""

from .cuda_driver import CudaDriver
from .driver import (
    UNSUPPORTED,
    AttributeValue,
    DeviceHandle,
    DriverInterface,
    Unsupported,
    as_flag,
    is_supported,
)
from .resolver import RESOLVED_ATTRIBUTES, resolve, resolve_all
from .session import DriverSession
from .types import ComputeCapability, DeviceReport, DriverVersion, PciLocation

__all__ = [
    "CudaDriver",
    "DriverInterface",
    "DriverSession",
    "DeviceHandle",
    "AttributeValue",
    "Unsupported",
    "UNSUPPORTED",
    "as_flag",
    "is_supported",
    "RESOLVED_ATTRIBUTES",
    "resolve",
    "resolve_all",
    "ComputeCapability",
    "DeviceReport",
    "DriverVersion",
    "PciLocation",
]
