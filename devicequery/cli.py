"""
Command line entry point for devicequery.

Enumerates CUDA devices, prints their capability report to stdout and
exits 0 on ``Result = PASS``, 1 otherwise.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from .device.cuda_driver import CudaDriver
from .device.driver import DeviceHandle, DriverInterface
from .device.resolver import resolve_all
from .device.session import DriverSession
from .errors import DriverError
from .report.formatter import format_report, summarize

logger = logging.getLogger(__name__)

LOG_FORMAT = "[devicequery] %(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="devicequery",
        description="Enumerate CUDA devices and print their hardware capabilities.",
    )


def _peer_access(session: DriverSession, dev: DeviceHandle, peer: DeviceHandle) -> bool:
    try:
        return session.can_access_peer(dev, peer)
    except DriverError:
        # A failed peer query reads as "No"
        logger.debug("Peer access query failed", exc_info=True)
        return False


def peer_access_matrix(
    session: DriverSession, handles: Sequence[DeviceHandle]
) -> list[list[bool]]:
    return [
        [i == j or _peer_access(session, dev, peer) for j, peer in enumerate(handles)]
        for i, dev in enumerate(handles)
    ]


def run(driver: DriverInterface | None = None, stdout: TextIO | None = None) -> int:
    """
    Run the device query pipeline.

    Returns:
        Process exit code: 0 on PASS, 1 on FAIL or any driver error.
    """
    if stdout is None:
        stdout = sys.stdout
    if driver is None:
        driver = CudaDriver()

    try:
        with DriverSession.open(driver) as session:
            driver_version = session.driver_version()
            reports = resolve_all(session)
            peer_access = None
            if len(reports) > 1:
                handles = [handle for _, handle in session.devices()]
                peer_access = peer_access_matrix(session, handles)
    except DriverError as e:
        logger.debug("Device query aborted", exc_info=True)
        print(f"deviceQuery: {e}", file=sys.stderr)
        return 1

    stdout.write(format_report(driver_version, reports, peer_access))
    stdout.flush()
    return 0 if summarize(reports).passed else 1


def main(argv: Sequence[str] | None = None) -> int:
    build_parser().parse_args(argv)
    logging.basicConfig(stream=sys.stderr, level=logging.WARNING, format=LOG_FORMAT)
    return run()


if __name__ == "__main__":
    sys.exit(main())
