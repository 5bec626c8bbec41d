"""
interfaces/cli.py
──────────────────────────────────────────────────────────────────────────────
Command-line interface for the NACE classification lookups.

Usage:
  # Full details for one code
  python -m nace_mcp.interfaces.cli get 01.11

  # Top-level sections, then the divisions of section A
  python -m nace_mcp.interfaces.cli browse
  python -m nace_mcp.interfaces.cli browse a

  # Label substring search / fuzzy suggestion
  python -m nace_mcp.interfaces.cli search "rice"
  python -m nace_mcp.interfaces.cli suggest "growing of rice" --json

  # Via installed entry-point (pyproject.toml [project.scripts])
  nace-lookup suggest "software development"

Exit codes:
  0 — success
  1 — code not found, or the data file could not be loaded
  2 — argument error or empty query
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

from nace_mcp.config.settings import get_settings
from nace_mcp.domain.exceptions import InvalidInputError, NACEError, NotFoundError
from nace_mcp.services.container import get_engine

logger = logging.getLogger(__name__)


# ── Argument parser ────────────────────────────────────────────────────────

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="nace-lookup",
        description="Look up, browse and match NACE Rev. 2.1 activity codes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON.",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    get_p = sub.add_parser("get", help="Show full details for one code.")
    get_p.add_argument("code", help="NACE code, e.g. 'A', '01', '01.1', '01.11'.")

    browse_p = sub.add_parser("browse", help="List the direct children of a code.")
    browse_p.add_argument(
        "parent_code",
        nargs="?",
        default="",
        help="Parent code. Omit to list the top-level sections.",
    )

    search_p = sub.add_parser("search", help="Substring search across labels.")
    search_p.add_argument("query", help="Text to look for in activity labels.")

    suggest_p = sub.add_parser("suggest", help="Suggest codes for a description.")
    suggest_p.add_argument(
        "activity_description",
        help="Free-text description of the economic activity.",
    )
    return p


# ── Formatting helpers ─────────────────────────────────────────────────────

def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _print_rows(rows: list[dict]) -> None:
    """Pretty-print result rows as '[code] label' lines."""
    if not rows:
        print("(no results)")
        return
    for r in rows:
        level = f"  ({r['level']})" if "level" in r else ""
        print(f"  [{r['code']}] {r['label']}{level}")
        if r.get("reason"):
            print(f"       {r['reason']}")


# ── Main logic ─────────────────────────────────────────────────────────────

def _log_level(verbose: bool) -> int | str:
    """DEBUG under --verbose, otherwise NACE_LOG_LEVEL."""
    if verbose:
        return logging.DEBUG
    return get_settings().log_level.upper()


def run(args: argparse.Namespace) -> int:
    """Execute one lookup command.

    Returns:
        Exit code (0 = success, 1 = not found / data error, 2 = bad input).
    """
    try:
        engine = get_engine()
    except NACEError as exc:
        logger.exception("Failed to build the classification index")
        print(f"ERROR: Index initialisation failed: {exc}", file=sys.stderr)
        return 1

    printer = _print_json if args.json_output else _print_rows

    try:
        if args.command == "get":
            entry = engine.get(args.code).model_dump(mode="json")
            if args.json_output:
                _print_json(entry)
            else:
                print(f"[{entry['code']}] {entry['label']}")
                print(f"  Level : {entry['level']}")
                print(f"  Parent: {entry['parent'] or '—'}")
        elif args.command == "browse":
            items = engine.browse(args.parent_code or None)
            rows = [i.model_dump(mode="json") for i in items]
            printer(rows)
        elif args.command == "search":
            rows = [h.model_dump(mode="json") for h in engine.search(args.query)]
            printer(rows)
        elif args.command == "suggest":
            response = engine.suggest(args.activity_description)
            if not response.has_tokens:
                print(response.message)
            else:
                rows = [s.model_dump(mode="json") for s in response.results]
                printer(rows)
    except NotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except InvalidInputError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    return 0


def main() -> None:
    """Entry point for the nace-lookup console script."""
    parser = _build_parser()
    args = parser.parse_args()

    try:
        log_level = _log_level(args.verbose)
    except NACEError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(2)

    sys.exit(run(args))


if __name__ == "__main__":
    main()
