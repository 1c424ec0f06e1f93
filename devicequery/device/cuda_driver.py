"""
CUDA driver binding.

Implements ``DriverInterface`` over NVIDIA's ``cuda-python`` driver API
bindings. The bindings are imported when the driver is initialized so the
rest of the package stays importable on machines without CUDA.
"""

from __future__ import annotations

import logging
from typing import Any

from ..enums.attributes import DeviceAttribute
from ..errors import DriverError, DriverInitError, QueryFailedError
from .driver import UNSUPPORTED, AttributeValue, DeviceHandle

logger = logging.getLogger(__name__)

NAME_BUFFER_SIZE = 256

# Statuses meaning "this device/driver does not report the attribute".
UNSUPPORTED_STATUSES = ("CUDA_ERROR_NOT_SUPPORTED", "CUDA_ERROR_INVALID_VALUE")


class CudaDriver:
    """Driver interface backed by ``cuda.bindings.driver``."""

    def __init__(self) -> None:
        self._driver: Any = None

    # ── Lifecycle ────────────────────────────────────────────────

    def initialize(self) -> None:
        try:
            from cuda.bindings import driver
        except ImportError as e:
            raise DriverInitError(
                "CUDA driver bindings are not installed (install cuda-python)"
            ) from e

        try:
            (status,) = driver.cuInit(0)
        except (RuntimeError, OSError) as e:
            # Raised by the bindings when libcuda cannot be loaded
            raise DriverInitError(f"Failed to load CUDA driver: {e}") from e

        if status != driver.CUresult.CUDA_SUCCESS:
            raise DriverInitError(
                "Failed to initialize CUDA driver", self._status_name(driver, status)
            )
        self._driver = driver
        logger.info("CUDA driver initialized")

    def shutdown(self) -> None:
        # The driver API has no de-initialization call; dropping the module
        # reference makes further queries fail fast.
        self._driver = None

    # ── Queries ──────────────────────────────────────────────────

    def driver_version(self) -> int:
        return self._call("cuDriverGetVersion")

    def device_count(self) -> int:
        return self._call("cuDeviceGetCount")

    def get_device(self, index: int) -> DeviceHandle:
        return self._call("cuDeviceGet", index)

    def device_name(self, handle: DeviceHandle) -> str:
        raw = self._call("cuDeviceGetName", NAME_BUFFER_SIZE, handle)
        return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")

    def total_memory(self, handle: DeviceHandle) -> int:
        return self._call("cuDeviceTotalMem", handle)

    def query_attribute(
        self, handle: DeviceHandle, attribute: DeviceAttribute
    ) -> AttributeValue:
        driver = self._require_driver()
        cu_attribute = getattr(
            driver.CUdevice_attribute, f"CU_DEVICE_ATTRIBUTE_{attribute.name}", None
        )
        if cu_attribute is None:
            logger.debug("Bindings do not define attribute %s", attribute.name)
            return UNSUPPORTED

        status, value = driver.cuDeviceGetAttribute(cu_attribute, handle)
        if status == driver.CUresult.CUDA_SUCCESS:
            return int(value)

        status_name = self._status_name(driver, status)
        if status_name in UNSUPPORTED_STATUSES:
            logger.debug("Attribute %s unsupported: %s", attribute.name, status_name)
            return UNSUPPORTED
        raise QueryFailedError(attribute, status_name)

    def can_access_peer(self, handle: DeviceHandle, peer: DeviceHandle) -> bool:
        driver = self._require_driver()
        status, can_access = driver.cuDeviceCanAccessPeer(handle, peer)
        if status != driver.CUresult.CUDA_SUCCESS:
            logger.debug("Peer access query failed: %s", self._status_name(driver, status))
            return False
        return can_access != 0

    # ── Private helpers ──────────────────────────────────────────

    def _require_driver(self) -> Any:
        if self._driver is None:
            raise DriverError("CUDA driver is not initialized")
        return self._driver

    def _call(self, function: str, *args: Any) -> Any:
        driver = self._require_driver()
        status, value = getattr(driver, function)(*args)
        if status != driver.CUresult.CUDA_SUCCESS:
            raise DriverError(f"{function} failed", self._status_name(driver, status))
        return value

    @staticmethod
    def _status_name(driver: Any, status: Any) -> str:
        err, name = driver.cuGetErrorName(status)
        if err == driver.CUresult.CUDA_SUCCESS and name:
            return name.decode("utf-8", errors="replace")
        return getattr(status, "name", str(status))
