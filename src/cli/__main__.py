# =============================================================================
# src/cli/__main__.py — Package Entry Point
# =============================================================================
#
# Enables `python -m src.cli <command>`; everything lives in catalog.py.
# =============================================================================

"""Allow ``python -m src.cli`` execution."""

import sys

from src.cli.catalog import main

sys.exit(main())
