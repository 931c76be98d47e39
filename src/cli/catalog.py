# =============================================================================
# src/cli/catalog.py — Catalog Command-Line Tool
# =============================================================================
#
# Works on the same data directory as the web app, without starting it:
#
#   python -m src.cli list                      # count-sorted table
#   python -m src.cli list --search ink --sort name
#   python -m src.cli list --json               # records as JSON
#   python -m src.cli export -o backup.json     # full export file
#   python -m src.cli chain-draft "red hair, ink wash"
#   python -m src.cli serve --port 3000         # run the API with uvicorn
#
# The data directory comes from Settings (DATA_DIR / .env) unless
# --data-dir is given.  JSON output goes to stdout; messages go to stderr.
# =============================================================================

"""Command-line access to the artist catalog.

Usage::

    python -m src.cli list [--search TERM] [--sort count|name|date] [--json]
    python -m src.cli export [--output FILE]
    python -m src.cli chain-draft CHAIN
    python -m src.cli serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

import structlog

from src.config.settings import Settings
from src.models.view import SortKey, ViewState
from src.services.catalog_factory import build_catalog
from src.utils.errors import ArtistCatalogError


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_table(records) -> str:  # noqa: ANN001
    """One line per record: total count, name, artist IDs, creation date."""
    if not records:
        return "(no artists)"
    lines = []
    for record in records:
        lines.append(
            f"{record.total_training_count:>6}  {record.name}  "
            f"[{', '.join(record.artist_ids)}]  {record.create_time}"
        )
    return "\n".join(lines)


def _dump_json(payload: object) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _logs_to_stderr(log_level: str) -> None:
    """Send structlog and stdlib logging to stderr so stdout carries only output."""
    level = max(logging.getLevelName(log_level.upper()), logging.WARNING)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    root.addHandler(handler)
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _handle_list(catalog, app_settings: Settings, args: argparse.Namespace) -> int:  # noqa: ANN001
    state = ViewState(
        search_term=args.search,
        sort_key=args.sort or app_settings.default_sort,
    )
    view = await catalog.build_view(state)
    if args.json:
        print(_dump_json([record.to_document() for record in view.records]))
    else:
        print(_format_table(view.records))
        print(f"{len(view.records)} of {view.total} artists", file=sys.stderr)
    return 0


async def _handle_export(catalog, app_settings: Settings, args: argparse.Namespace) -> int:  # noqa: ANN001
    documents = await catalog.export_all()
    output = Path(args.output or app_settings.export_filename)
    output.write_text(_dump_json(documents), encoding="utf-8")
    print(f"Exported {len(documents)} artists to: {output}", file=sys.stderr)
    return 0


async def _handle_chain_draft(catalog, app_settings: Settings, args: argparse.Namespace) -> int:  # noqa: ANN001
    draft = await catalog.draft_from_chain(args.chain)
    print(_dump_json(draft.model_dump(by_alias=True)))
    if not draft.matched_record_ids:
        print("No artists matched this chain.", file=sys.stderr)
    return 0


def _handle_serve(app_settings: Settings, args: argparse.Namespace) -> int:
    import uvicorn

    # The app builds its own Settings on import; hand --data-dir over via env.
    os.environ["DATA_DIR"] = app_settings.data_dir
    uvicorn.run(
        "src.main:app",
        host=args.host or app_settings.app_host,
        port=args.port or app_settings.app_port,
    )
    return 0


# ---------------------------------------------------------------------------
# Parser / entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the catalog CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m src.cli",
        description="Browse, export and query the artist catalog.",
    )
    parser.add_argument(
        "--data-dir",
        dest="data_dir",
        help="Directory holding artist JSON files and images (default: DATA_DIR)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Catalog commands")

    # -- list --
    list_parser = subparsers.add_parser("list", help="List artists")
    list_parser.add_argument("--search", default="", help="Case-insensitive search term")
    list_parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        help="Sort order (default: DEFAULT_SORT)",
    )
    list_parser.add_argument("--json", action="store_true", help="Print records as JSON")

    # -- export --
    export_parser = subparsers.add_parser("export", help="Write every record to one JSON file")
    export_parser.add_argument(
        "--output", "-o", help="Output file (default: EXPORT_FILENAME)"
    )

    # -- chain-draft --
    chain_parser = subparsers.add_parser(
        "chain-draft", help="Show the artist IDs and counts a trigger-word chain maps to"
    )
    chain_parser.add_argument("chain", help='Comma-separated trigger words, e.g. "a, b"')

    # -- serve --
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default: APP_HOST)")
    serve_parser.add_argument("--port", type=int, help="Port (default: APP_PORT)")

    return parser


_ASYNC_HANDLERS = {
    "list": _handle_list,
    "export": _handle_export,
    "chain-draft": _handle_chain_draft,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    overrides = {"data_dir": args.data_dir} if args.data_dir else {}
    app_settings = Settings(**overrides)

    if args.command == "serve":
        return _handle_serve(app_settings, args)

    _logs_to_stderr(app_settings.log_level)
    catalog = build_catalog(app_settings)
    try:
        return asyncio.run(_ASYNC_HANDLERS[args.command](catalog, app_settings, args))
    except ArtistCatalogError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
