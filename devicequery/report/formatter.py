"""
Report Formatter.

Renders device reports into the fixed ``deviceQuery`` text layout. Every
function here is pure: the same inputs always produce the same text.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..constants.report import NOT_AVAILABLE
from ..device.driver import AttributeValue, Unsupported, is_supported
from ..device.types import BYTES_PER_MBYTE, DeviceReport, DriverVersion

__all__ = [
    "ReportSummary",
    "format_clock",
    "format_device",
    "format_memory",
    "format_peer_matrix",
    "format_report",
    "summarize",
]

LABEL_WIDTH = 47
INDENT = "  "


@dataclass(frozen=True)
class ReportSummary:
    device_count: int
    passed: bool

    @property
    def verdict(self) -> str:
        return "PASS" if self.passed else "FAIL"


def summarize(reports: Sequence[DeviceReport]) -> ReportSummary:
    """PASS requires at least one device and no inconsistent report."""
    passed = bool(reports) and not any(r.inconsistencies for r in reports)
    return ReportSummary(device_count=len(reports), passed=passed)


# ── Value rendering ──────────────────────────────────────────────


def _value(value: AttributeValue) -> str:
    return str(value) if is_supported(value) else NOT_AVAILABLE


def _padded(value: AttributeValue) -> str:
    return f"{value:03d}" if is_supported(value) else NOT_AVAILABLE


def _yes_no(flag: bool | Unsupported) -> str:
    if not is_supported(flag):
        return NOT_AVAILABLE
    return "Yes" if flag else "No"


def _dims(values: Sequence[AttributeValue]) -> str:
    return ", ".join(_value(v) for v in values)


def _with_unit(value: AttributeValue, unit: str) -> str:
    return f"{value}{unit}" if is_supported(value) else NOT_AVAILABLE


def format_memory(total_bytes: int) -> str:
    """``47576711168`` -> ``45373 MBytes (47576711168 bytes)``."""
    return f"{total_bytes / BYTES_PER_MBYTE:.0f} MBytes ({total_bytes} bytes)"


def format_clock(clock_khz: AttributeValue) -> str:
    """``2520000`` -> ``2520 MHz (2.52 GHz)``."""
    if not is_supported(clock_khz):
        return NOT_AVAILABLE
    return f"{clock_khz / 1000:.0f} MHz ({clock_khz / 1_000_000:.2f} GHz)"


def _memory_clock(clock_khz: AttributeValue) -> str:
    if not is_supported(clock_khz):
        return NOT_AVAILABLE
    return f"{clock_khz / 1000:.0f} Mhz"


def _line(label: str, value: str) -> str:
    return f"{INDENT}{label:<{LABEL_WIDTH}}{value}"


# ── Sections ─────────────────────────────────────────────────────


def _cores_line(report: DeviceReport) -> str:
    mp_count = _padded(report.multiprocessor_count)
    cores_per_mp = report.cores_per_multiprocessor
    if cores_per_mp is None:
        sm = report.compute_capability or NOT_AVAILABLE
        return f"{INDENT}({mp_count}) Multiprocessors (unknown CUDA Cores/MP for SM {sm})"
    total_cores = report.total_cores
    label = f"({mp_count}) Multiprocessors, ({cores_per_mp:03d}) CUDA Cores/MP:"
    # Wide multiprocessor counts push the value right but keep a four-space gap
    width = max(LABEL_WIDTH, len(label) + 4)
    total = NOT_AVAILABLE if total_cores is None else total_cores
    return f"{INDENT}{label:<{width}}{total} CUDA Cores"


def _concurrency(report: DeviceReport) -> str:
    text = _yes_no(report.concurrent_copy_and_kernel)
    if report.concurrent_copy_and_kernel is True and is_supported(report.async_engine_count):
        text += f" with {report.async_engine_count} copy engine(s)"
    return text


def format_device(report: DeviceReport) -> list[str]:
    """Render one device block, without the trailing blank line."""
    tex1d_w, tex1d_layers = report.max_texture_1d_layered
    tex2d_w, tex2d_h, tex2d_layers = report.max_texture_2d_layered

    lines = [
        f'Device {report.index}: "{report.name}"',
        _line("CUDA Driver Version:", str(report.driver_version)),
        _line(
            "CUDA Capability Major/Minor version number:",
            str(report.compute_capability or NOT_AVAILABLE),
        ),
        _line("Total amount of global memory:", format_memory(report.total_global_memory)),
        _cores_line(report),
        _line("GPU Max Clock rate:", format_clock(report.clock_rate_khz)),
        _line("Memory Clock rate:", _memory_clock(report.memory_clock_rate_khz)),
        _line("Memory Bus Width:", _with_unit(report.memory_bus_width, "-bit")),
    ]
    if is_supported(report.l2_cache_size) and report.l2_cache_size > 0:
        lines.append(_line("L2 Cache Size:", f"{report.l2_cache_size} bytes"))

    lines += [
        _line(
            "Maximum Texture Dimension Size (x,y,z)",
            f"1D=({_dims(report.max_texture_1d)}) "
            f"2D=({_dims(report.max_texture_2d)}) "
            f"3D=({_dims(report.max_texture_3d)})",
        ),
        _line(
            "Maximum Layered 1D Texture Size, (num) layers",
            f"1D=({_value(tex1d_w)}) {_value(tex1d_layers)} layers",
        ),
        _line(
            "Maximum Layered 2D Texture Size, (num) layers",
            f"2D=({_dims((tex2d_w, tex2d_h))}) {_value(tex2d_layers)} layers",
        ),
        _line(
            "Total amount of constant memory:",
            _with_unit(report.total_constant_memory, " bytes"),
        ),
        _line(
            "Total amount of shared memory per block:",
            _with_unit(report.shared_memory_per_block, " bytes"),
        ),
        _line(
            "Total shared memory per multiprocessor:",
            _with_unit(report.shared_memory_per_multiprocessor, " bytes"),
        ),
        _line(
            "Total number of registers available per block:",
            _value(report.registers_per_block),
        ),
        _line("Warp size:", _value(report.warp_size)),
        _line(
            "Maximum number of threads per multiprocessor:",
            _value(report.max_threads_per_multiprocessor),
        ),
        _line("Maximum number of threads per block:", _value(report.max_threads_per_block)),
        _line(
            "Max dimension size of a thread block (x,y,z):",
            f"({_dims(report.max_block_dim)})",
        ),
        _line(
            "Max dimension size of a grid size    (x,y,z):",
            f"({_dims(report.max_grid_dim)})",
        ),
        _line("Maximum memory pitch:", _with_unit(report.max_pitch, " bytes")),
        _line("Texture alignment:", _with_unit(report.texture_alignment, " bytes")),
        _line("Concurrent copy and kernel execution:", _concurrency(report)),
        _line("Run time limit on kernels:", _yes_no(report.kernel_exec_timeout)),
        _line("Integrated GPU sharing Host Memory:", _yes_no(report.integrated)),
        _line("Support host page-locked memory mapping:", _yes_no(report.can_map_host_memory)),
        _line("Alignment requirement for Surfaces:", _yes_no(report.surface_alignment)),
    ]
    if is_supported(report.ecc_enabled):
        lines.append(
            _line(
                "Device has ECC support:",
                "Enabled" if report.ecc_enabled else "Disabled",
            )
        )
    # Only Windows drivers report TCC/WDDM mode
    if is_supported(report.tcc_driver):
        lines.append(
            _line(
                "CUDA Device Driver Mode (TCC or WDDM):",
                "TCC (Tesla Compute Cluster Driver)"
                if report.tcc_driver
                else "WDDM (Windows Display Driver Model)",
            )
        )

    lines += [
        _line("Device supports Unified Addressing (UVA):", _yes_no(report.unified_addressing)),
        _line("Device supports Managed Memory:", _yes_no(report.managed_memory)),
        _line("Device supports Compute Preemption:", _yes_no(report.compute_preemption)),
        _line("Supports Cooperative Kernel Launch:", _yes_no(report.cooperative_launch)),
        _line(
            "Supports MultiDevice Co-op Kernel Launch:",
            _yes_no(report.cooperative_multi_device_launch),
        ),
        _line("Device PCI Domain ID / Bus ID / location ID:", str(report.pci_location)),
        f"{INDENT}Compute Mode:",
        f"     < {report.compute_mode_description} >",
    ]
    return lines


def format_peer_matrix(peer_access: Sequence[Sequence[bool]]) -> list[str]:
    """Render the device-to-device peer access matrix."""
    size = len(peer_access)
    lines = [
        "deviceQuery, Peer-to-Peer GPU Access Matrix",
        "   D\\D" + "".join(f"{j:>6}" for j in range(size)),
    ]
    for i, row in enumerate(peer_access):
        cells = "".join(
            f"   {'Yes' if i == j or access else 'No'}" for j, access in enumerate(row)
        )
        lines.append(f"   {i:>3}{cells}")
    return lines


def format_report(
    driver_version: DriverVersion,
    reports: Sequence[DeviceReport],
    peer_access: Sequence[Sequence[bool]] | None = None,
) -> str:
    """
    Render the complete report.

    Args:
        driver_version: Version reported by the driver session.
        reports: One report per device, in device order.
        peer_access: Optional ``n x n`` matrix of peer access results; shown
            only when more than one device is present.

    Returns:
        The full report text, newline terminated.
    """
    summary = summarize(reports)
    lines = [f"Detected {summary.device_count} CUDA Capable device(s)", ""]
    if not reports:
        lines += ["There are no available device(s) that support CUDA", ""]

    for report in reports:
        lines += format_device(report)
        lines.append("")

    if peer_access is not None and len(reports) > 1:
        lines += format_peer_matrix(peer_access)
        lines.append("")

    lines += [
        f"deviceQuery, CUDA Driver = {driver_version}",
        "",
        f"Result = {summary.verdict}",
    ]
    return "\n".join(lines) + "\n"
