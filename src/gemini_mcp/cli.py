from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, MissingCredentialError, load_config, require_api_key, with_overrides
from .server import run
from .tools.schemas import TOOL_SCHEMAS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gemini-mcp",
        description="MCP server exposing Google Gemini tools over stdio.",
    )
    parser.add_argument("--config", type=Path, help="Path to a YAML config file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (logs go to stderr)",
    )
    parser.add_argument("--model", help="Gemini model name, e.g. gemini-2.5-pro")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("serve", help="Run the MCP server over stdio (default)")
    subparsers.add_parser("tools", help="List the tools this server exposes")
    return parser


def list_tools_command() -> int:
    width = max(len(entry["name"]) for entry in TOOL_SCHEMAS)
    for entry in TOOL_SCHEMAS:
        print(f"{entry['name']:<{width}}  {entry['description']}")
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "tools":
        sys.exit(list_tools_command())
    try:
        api_key = require_api_key()
    except MissingCredentialError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)
    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(2)
    config = with_overrides(config, log_level=args.log_level, model=args.model)
    sys.exit(run(config, api_key))


if __name__ == "__main__":
    main()
