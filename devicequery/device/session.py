"""
Driver Session.

Owns the connection to the accelerator driver for the duration of one
report run. Use as a context manager so the driver is released on every
exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from types import TracebackType

from ..errors import DriverError, NoSuchDeviceError
from .driver import DeviceHandle, DriverInterface
from .types import DriverVersion

logger = logging.getLogger(__name__)


class DriverSession:
    """Initialized driver plus the device count it reported."""

    def __init__(self, driver: DriverInterface) -> None:
        self._driver = driver
        self._device_count: int | None = None
        self._closed = False

    @classmethod
    def open(cls, driver: DriverInterface) -> DriverSession:
        """Initialize ``driver`` and return a session owning it."""
        driver.initialize()
        session = cls(driver)
        try:
            session._device_count = driver.device_count()
        except Exception:
            session.close()
            raise
        logger.info("Driver session opened: %d device(s) visible", session._device_count)
        return session

    def __enter__(self) -> DriverSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._driver.shutdown()
        logger.debug("Driver session closed")

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def driver(self) -> DriverInterface:
        self._check_open()
        return self._driver

    def device_count(self) -> int:
        self._check_open()
        return self._device_count or 0

    def get_device(self, index: int) -> DeviceHandle:
        count = self.device_count()
        if not 0 <= index < count:
            raise NoSuchDeviceError(index, count)
        return self._driver.get_device(index)

    def devices(self) -> Iterator[tuple[int, DeviceHandle]]:
        for index in range(self.device_count()):
            yield index, self.get_device(index)

    def driver_version(self) -> DriverVersion:
        self._check_open()
        return DriverVersion.from_raw(self._driver.driver_version())

    def can_access_peer(self, handle: DeviceHandle, peer: DeviceHandle) -> bool:
        self._check_open()
        return self._driver.can_access_peer(handle, peer)

    def _check_open(self) -> None:
        if self._closed:
            raise DriverError("Driver session is closed")
