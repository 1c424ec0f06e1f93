#!/usr/bin/env python3
"""
Main entry point for devicequery.

Prints the capability report of every CUDA device visible to the driver.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from devicequery.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
