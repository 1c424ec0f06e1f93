import sys
from pathlib import Path

import pytest

pytest_plugins = [
    "tests.fixtures.config_fixtures",
    "tests.fixtures.driver_fixtures",
    "tests.fixtures.report_fixtures",
]

# The project root is one level up from conftest.py
project_root = Path(__file__).resolve().parent.parent

# Add the project root to sys.path.
# This allows 'import devicequery...' to resolve without installing.
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def _cuda_available() -> bool:
    from devicequery.device.cuda_driver import CudaDriver

    driver = CudaDriver()
    try:
        driver.initialize()
    except Exception:
        return False
    driver.shutdown()
    return True


def pytest_configure(config):
    """Register the 'gpu' marker."""
    config.addinivalue_line("markers", "gpu: mark tests that require a GPU")


def pytest_collection_modifyitems(config, items):
    """Automatically skip GPU tests when no CUDA driver is usable."""
    if not any("gpu" in item.keywords for item in items):
        return
    if _cuda_available():
        return

    skip_gpu = pytest.mark.skip(reason="GPU/CUDA not available")
    for item in items:
        if "gpu" in item.keywords:
            item.add_marker(skip_gpu)
