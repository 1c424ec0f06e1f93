"""Value types produced by the capability resolver."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants.report import COMPUTE_MODE_DESCRIPTIONS, UNKNOWN_COMPUTE_MODE
from ..enums.compute_mode import ComputeMode
from .driver import AttributeValue, Unsupported, is_supported

BYTES_PER_MBYTE = 1024 * 1024


@dataclass(frozen=True)
class DriverVersion:
    """Driver API version as reported by the driver."""

    major: int
    minor: int

    @classmethod
    def from_raw(cls, raw: int) -> DriverVersion:
        """Decode the packed ``1000 * major + 10 * minor`` form."""
        return cls(major=raw // 1000, minor=(raw % 1000) // 10)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True)
class ComputeCapability:
    """SM version of a device."""

    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True)
class PciLocation:
    domain: AttributeValue
    bus: AttributeValue
    device: AttributeValue

    def __str__(self) -> str:
        return f"{self.domain} / {self.bus} / {self.device}"


@dataclass(frozen=True)
class DeviceReport:
    """Immutable snapshot of one device's capabilities."""

    index: int
    name: str
    driver_version: DriverVersion
    compute_capability: ComputeCapability | None
    total_global_memory: int
    multiprocessor_count: AttributeValue
    cores_per_multiprocessor: int | None
    clock_rate_khz: AttributeValue
    memory_clock_rate_khz: AttributeValue
    memory_bus_width: AttributeValue
    l2_cache_size: AttributeValue
    # (width,), (width, height), (width, height, depth)
    max_texture_1d: tuple[AttributeValue]
    max_texture_2d: tuple[AttributeValue, AttributeValue]
    max_texture_3d: tuple[AttributeValue, AttributeValue, AttributeValue]
    # (width, layers), (width, height, layers)
    max_texture_1d_layered: tuple[AttributeValue, AttributeValue]
    max_texture_2d_layered: tuple[AttributeValue, AttributeValue, AttributeValue]
    total_constant_memory: AttributeValue
    shared_memory_per_block: AttributeValue
    shared_memory_per_multiprocessor: AttributeValue
    registers_per_block: AttributeValue
    warp_size: AttributeValue
    max_threads_per_multiprocessor: AttributeValue
    max_threads_per_block: AttributeValue
    max_block_dim: tuple[AttributeValue, AttributeValue, AttributeValue]
    max_grid_dim: tuple[AttributeValue, AttributeValue, AttributeValue]
    max_pitch: AttributeValue
    texture_alignment: AttributeValue
    concurrent_copy_and_kernel: bool | Unsupported
    async_engine_count: AttributeValue
    kernel_exec_timeout: bool | Unsupported
    integrated: bool | Unsupported
    can_map_host_memory: bool | Unsupported
    surface_alignment: bool | Unsupported
    ecc_enabled: bool | Unsupported
    tcc_driver: bool | Unsupported
    unified_addressing: bool | Unsupported
    managed_memory: bool | Unsupported
    compute_preemption: bool | Unsupported
    cooperative_launch: bool | Unsupported
    cooperative_multi_device_launch: bool | Unsupported
    pci_location: PciLocation
    compute_mode: AttributeValue

    @property
    def total_cores(self) -> int | None:
        if self.cores_per_multiprocessor is None or not is_supported(self.multiprocessor_count):
            return None
        return self.multiprocessor_count * self.cores_per_multiprocessor

    @property
    def compute_mode_description(self) -> str:
        if not is_supported(self.compute_mode):
            return UNKNOWN_COMPUTE_MODE
        try:
            return COMPUTE_MODE_DESCRIPTIONS[ComputeMode(self.compute_mode)]
        except ValueError:
            return UNKNOWN_COMPUTE_MODE

    @property
    def inconsistencies(self) -> tuple[str, ...]:
        """Reasons this report cannot be trusted; empty when coherent."""
        problems: list[str] = []
        if self.compute_capability is None:
            problems.append("compute capability not reported")
        if not is_supported(self.multiprocessor_count) or self.multiprocessor_count <= 0:
            problems.append("multiprocessor count not reported")
        if not is_supported(self.warp_size) or self.warp_size <= 0:
            problems.append("warp size not reported")
        if self.total_global_memory <= 0:
            problems.append("global memory size not reported")
        return tuple(problems)
