from enum import IntEnum


class ComputeMode(IntEnum):
    """Device compute modes reported by ``COMPUTE_MODE``."""

    DEFAULT = 0
    EXCLUSIVE = 1
    PROHIBITED = 2
    EXCLUSIVE_PROCESS = 3
