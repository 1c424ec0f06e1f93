"""Fixed strings used in the device report."""

from .report import COMPUTE_MODE_DESCRIPTIONS, NOT_AVAILABLE, UNKNOWN_COMPUTE_MODE

__all__ = [
    "COMPUTE_MODE_DESCRIPTIONS",
    "NOT_AVAILABLE",
    "UNKNOWN_COMPUTE_MODE",
]
