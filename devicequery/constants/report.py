"""
Report constants.
"""

from types import MappingProxyType
from typing import Mapping

from ..enums.compute_mode import ComputeMode

NOT_AVAILABLE = "N/A"

UNKNOWN_COMPUTE_MODE = "Unknown"

COMPUTE_MODE_DESCRIPTIONS: Mapping[ComputeMode, str] = MappingProxyType(
    {
        ComputeMode.DEFAULT: (
            "Default (multiple host threads can use ::cudaSetDevice() with device simultaneously)"
        ),
        ComputeMode.EXCLUSIVE: (
            "Exclusive (only one host thread in one process is able to use "
            "::cudaSetDevice() with this device)"
        ),
        ComputeMode.PROHIBITED: (
            "Prohibited (no host thread can use ::cudaSetDevice() with this device)"
        ),
        ComputeMode.EXCLUSIVE_PROCESS: (
            "Exclusive Process (many threads in one process is able to use "
            "::cudaSetDevice() with this device)"
        ),
    }
)
