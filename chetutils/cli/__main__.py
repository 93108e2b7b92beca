"""
chetutils CLI entry point.

Usage:
    python -m chetutils.cli upper 1234.56
    python -m chetutils.cli lunar 2025-02-01
    python -m chetutils.cli ntp
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
