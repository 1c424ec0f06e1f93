"""Enumerate CUDA devices and report their hardware capabilities."""

__version__ = "0.1.0"
