"""CLI tools for the artist catalog.

- ``python -m src.cli`` -- list, export, chain-draft and serve commands
  over the configured data directory (see ``src/cli/catalog.py``).
"""
