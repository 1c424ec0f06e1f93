"""
Compute capability to cores-per-multiprocessor table.

The table is data, not code: it ships as ``architectures.yaml`` next to this
module and is loaded once into a read-only mapping. Lookups are exact matches
on ``(major, minor)``; pairs missing from the table resolve to ``None``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from types import MappingProxyType

from .base import BaseConfig

logger = logging.getLogger(__name__)

__all__ = [
    "Architecture",
    "ArchitectureTable",
    "cores_per_multiprocessor",
    "default_table",
]


@dataclass(frozen=True)
class Architecture(BaseConfig):
    """One compute capability and its FP32 cores per multiprocessor."""

    name: str
    major: int
    minor: int
    cores: int


@dataclass(frozen=True)
class ArchitectureTable(BaseConfig):
    """Immutable exact-match lookup over a sequence of architectures."""

    architectures: tuple[Architecture, ...] = ()

    def __post_init__(self) -> None:
        by_version: dict[tuple[int, int], Architecture] = {}
        for arch in self.architectures:
            key = (arch.major, arch.minor)
            if key in by_version:
                raise ValueError(f"Duplicate compute capability {arch.major}.{arch.minor}")
            if arch.cores <= 0:
                raise ValueError(
                    f"Cores per multiprocessor must be positive for SM "
                    f"{arch.major}.{arch.minor}, got {arch.cores}"
                )
            by_version[key] = arch
        object.__setattr__(self, "_by_version", MappingProxyType(by_version))

    def lookup(self, major: int, minor: int) -> Architecture | None:
        return self._by_version.get((major, minor))

    def cores_per_multiprocessor(self, major: int, minor: int) -> int | None:
        """Return cores per SM for ``major.minor``, or ``None`` if unmapped."""
        arch = self.lookup(major, minor)
        if arch is None:
            logger.debug("No cores-per-SM entry for compute capability %d.%d", major, minor)
            return None
        return arch.cores

    def __len__(self) -> int:
        return len(self._by_version)

    def __contains__(self, key: object) -> bool:
        return key in self._by_version


@lru_cache(maxsize=1)
def default_table() -> ArchitectureTable:
    """Load the packaged ``architectures.yaml`` table."""
    text = resources.files(__package__).joinpath("architectures.yaml").read_text(encoding="utf-8")
    table = ArchitectureTable.from_yaml_text(text)
    logger.debug("Loaded %d compute capability entries", len(table))
    return table


def cores_per_multiprocessor(major: int, minor: int) -> int | None:
    return default_table().cores_per_multiprocessor(major, minor)
