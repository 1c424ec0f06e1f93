"""Configuration for devicequery."""

from .architectures import (
    Architecture,
    ArchitectureTable,
    cores_per_multiprocessor,
    default_table,
)
from .base import BaseConfig

__all__ = [
    "BaseConfig",
    "Architecture",
    "ArchitectureTable",
    "cores_per_multiprocessor",
    "default_table",
]
