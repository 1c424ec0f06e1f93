"""
Capability Resolver.

Issues the fixed, ordered set of attribute queries for one device and
assembles them into a ``DeviceReport``. Unsupported attributes are kept as
``UNSUPPORTED``; any other driver failure aborts the whole report.
"""

from __future__ import annotations

import logging

from ..configs.architectures import ArchitectureTable, default_table
from ..enums.attributes import DeviceAttribute as A
from .driver import AttributeValue, DeviceHandle, as_flag, is_supported
from .session import DriverSession
from .types import ComputeCapability, DeviceReport, PciLocation

logger = logging.getLogger(__name__)

__all__ = ["RESOLVED_ATTRIBUTES", "resolve", "resolve_all"]

# Query order; matches the order fields appear in the report.
RESOLVED_ATTRIBUTES: tuple[A, ...] = (
    A.COMPUTE_CAPABILITY_MAJOR,
    A.COMPUTE_CAPABILITY_MINOR,
    A.MULTIPROCESSOR_COUNT,
    A.CLOCK_RATE,
    A.MEMORY_CLOCK_RATE,
    A.GLOBAL_MEMORY_BUS_WIDTH,
    A.L2_CACHE_SIZE,
    A.MAXIMUM_TEXTURE1D_WIDTH,
    A.MAXIMUM_TEXTURE2D_WIDTH,
    A.MAXIMUM_TEXTURE2D_HEIGHT,
    A.MAXIMUM_TEXTURE3D_WIDTH,
    A.MAXIMUM_TEXTURE3D_HEIGHT,
    A.MAXIMUM_TEXTURE3D_DEPTH,
    A.MAXIMUM_TEXTURE1D_LAYERED_WIDTH,
    A.MAXIMUM_TEXTURE1D_LAYERED_LAYERS,
    A.MAXIMUM_TEXTURE2D_LAYERED_WIDTH,
    A.MAXIMUM_TEXTURE2D_LAYERED_HEIGHT,
    A.MAXIMUM_TEXTURE2D_LAYERED_LAYERS,
    A.TOTAL_CONSTANT_MEMORY,
    A.MAX_SHARED_MEMORY_PER_BLOCK,
    A.MAX_SHARED_MEMORY_PER_MULTIPROCESSOR,
    A.MAX_REGISTERS_PER_BLOCK,
    A.WARP_SIZE,
    A.MAX_THREADS_PER_MULTIPROCESSOR,
    A.MAX_THREADS_PER_BLOCK,
    A.MAX_BLOCK_DIM_X,
    A.MAX_BLOCK_DIM_Y,
    A.MAX_BLOCK_DIM_Z,
    A.MAX_GRID_DIM_X,
    A.MAX_GRID_DIM_Y,
    A.MAX_GRID_DIM_Z,
    A.MAX_PITCH,
    A.TEXTURE_ALIGNMENT,
    A.GPU_OVERLAP,
    A.ASYNC_ENGINE_COUNT,
    A.KERNEL_EXEC_TIMEOUT,
    A.INTEGRATED,
    A.CAN_MAP_HOST_MEMORY,
    A.SURFACE_ALIGNMENT,
    A.ECC_ENABLED,
    A.TCC_DRIVER,
    A.UNIFIED_ADDRESSING,
    A.MANAGED_MEMORY,
    A.COMPUTE_PREEMPTION_SUPPORTED,
    A.COOPERATIVE_LAUNCH,
    A.COOPERATIVE_MULTI_DEVICE_LAUNCH,
    A.PCI_DOMAIN_ID,
    A.PCI_BUS_ID,
    A.PCI_DEVICE_ID,
    A.COMPUTE_MODE,
)


def resolve(
    session: DriverSession,
    index: int,
    handle: DeviceHandle,
    table: ArchitectureTable | None = None,
) -> DeviceReport:
    """
    Build the capability report for one device.

    Args:
        session: Open driver session the device belongs to.
        index: Ordinal of the device, used for the report heading.
        handle: Device handle from ``session.get_device(index)``.
        table: Cores-per-SM table; defaults to the packaged one.

    Returns:
        A complete ``DeviceReport``. ``QueryFailedError`` propagates
        unchanged, so a partially filled report is never returned.
    """
    if table is None:
        table = default_table()
    driver = session.driver

    name = driver.device_name(handle)
    total_memory = driver.total_memory(handle)
    values: dict[A, AttributeValue] = {
        attribute: driver.query_attribute(handle, attribute)
        for attribute in RESOLVED_ATTRIBUTES
    }

    unsupported = [a.name for a, v in values.items() if not is_supported(v)]
    if unsupported:
        logger.debug("Device %d: unsupported attributes: %s", index, ", ".join(unsupported))

    major = values[A.COMPUTE_CAPABILITY_MAJOR]
    minor = values[A.COMPUTE_CAPABILITY_MINOR]
    if not (is_supported(major) and is_supported(minor)):
        capability = None
        cores_per_mp = None
    else:
        capability = ComputeCapability(major, minor)
        cores_per_mp = table.cores_per_multiprocessor(major, minor)

    return DeviceReport(
        index=index,
        name=name,
        driver_version=session.driver_version(),
        compute_capability=capability,
        total_global_memory=total_memory,
        multiprocessor_count=values[A.MULTIPROCESSOR_COUNT],
        cores_per_multiprocessor=cores_per_mp,
        clock_rate_khz=values[A.CLOCK_RATE],
        memory_clock_rate_khz=values[A.MEMORY_CLOCK_RATE],
        memory_bus_width=values[A.GLOBAL_MEMORY_BUS_WIDTH],
        l2_cache_size=values[A.L2_CACHE_SIZE],
        max_texture_1d=(values[A.MAXIMUM_TEXTURE1D_WIDTH],),
        max_texture_2d=(
            values[A.MAXIMUM_TEXTURE2D_WIDTH],
            values[A.MAXIMUM_TEXTURE2D_HEIGHT],
        ),
        max_texture_3d=(
            values[A.MAXIMUM_TEXTURE3D_WIDTH],
            values[A.MAXIMUM_TEXTURE3D_HEIGHT],
            values[A.MAXIMUM_TEXTURE3D_DEPTH],
        ),
        max_texture_1d_layered=(
            values[A.MAXIMUM_TEXTURE1D_LAYERED_WIDTH],
            values[A.MAXIMUM_TEXTURE1D_LAYERED_LAYERS],
        ),
        max_texture_2d_layered=(
            values[A.MAXIMUM_TEXTURE2D_LAYERED_WIDTH],
            values[A.MAXIMUM_TEXTURE2D_LAYERED_HEIGHT],
            values[A.MAXIMUM_TEXTURE2D_LAYERED_LAYERS],
        ),
        total_constant_memory=values[A.TOTAL_CONSTANT_MEMORY],
        shared_memory_per_block=values[A.MAX_SHARED_MEMORY_PER_BLOCK],
        shared_memory_per_multiprocessor=values[A.MAX_SHARED_MEMORY_PER_MULTIPROCESSOR],
        registers_per_block=values[A.MAX_REGISTERS_PER_BLOCK],
        warp_size=values[A.WARP_SIZE],
        max_threads_per_multiprocessor=values[A.MAX_THREADS_PER_MULTIPROCESSOR],
        max_threads_per_block=values[A.MAX_THREADS_PER_BLOCK],
        max_block_dim=(
            values[A.MAX_BLOCK_DIM_X],
            values[A.MAX_BLOCK_DIM_Y],
            values[A.MAX_BLOCK_DIM_Z],
        ),
        max_grid_dim=(
            values[A.MAX_GRID_DIM_X],
            values[A.MAX_GRID_DIM_Y],
            values[A.MAX_GRID_DIM_Z],
        ),
        max_pitch=values[A.MAX_PITCH],
        texture_alignment=values[A.TEXTURE_ALIGNMENT],
        concurrent_copy_and_kernel=as_flag(values[A.GPU_OVERLAP]),
        async_engine_count=values[A.ASYNC_ENGINE_COUNT],
        kernel_exec_timeout=as_flag(values[A.KERNEL_EXEC_TIMEOUT]),
        integrated=as_flag(values[A.INTEGRATED]),
        can_map_host_memory=as_flag(values[A.CAN_MAP_HOST_MEMORY]),
        surface_alignment=as_flag(values[A.SURFACE_ALIGNMENT]),
        ecc_enabled=as_flag(values[A.ECC_ENABLED]),
        tcc_driver=as_flag(values[A.TCC_DRIVER]),
        unified_addressing=as_flag(values[A.UNIFIED_ADDRESSING]),
        managed_memory=as_flag(values[A.MANAGED_MEMORY]),
        compute_preemption=as_flag(values[A.COMPUTE_PREEMPTION_SUPPORTED]),
        cooperative_launch=as_flag(values[A.COOPERATIVE_LAUNCH]),
        cooperative_multi_device_launch=as_flag(values[A.COOPERATIVE_MULTI_DEVICE_LAUNCH]),
        pci_location=PciLocation(
            domain=values[A.PCI_DOMAIN_ID],
            bus=values[A.PCI_BUS_ID],
            device=values[A.PCI_DEVICE_ID],
        ),
        compute_mode=values[A.COMPUTE_MODE],
    )


def resolve_all(
    session: DriverSession, table: ArchitectureTable | None = None
) -> list[DeviceReport]:
    """Resolve every device in the session, one at a time and in order."""
    reports = []
    for index, handle in session.devices():
        report = resolve(session, index, handle, table)
        logger.info(
            "Resolved device %d: %s (SM %s)",
            index,
            report.name,
            report.compute_capability or "unknown",
        )
        for problem in report.inconsistencies:
            logger.warning("Device %d report inconsistent: %s", index, problem)
        reports.append(report)
    return reports
