#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/__main__.py
"""Allow running ``python -m doccompare``."""

import sys

from doccompare.cli import main

if __name__ == "__main__":
    sys.exit(main())
