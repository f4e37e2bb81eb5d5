"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m foundation_cli request METHOD URL [-H "Key: Value"]... [-d JSON] [--json] [--receipts]
    python -m foundation_cli validate DATA.json [--rules FILE] [--rule FIELD=RULES]... [--json]
    python -m foundation_cli serve [--host HOST] [--port PORT] [--reload]
    python -m foundation_cli config --init | --show

Environment Variables:
    FOUNDATION_HTTP_TIMEOUT     Timeout for outgoing requests in seconds
    FOUNDATION_HTTP_USER_AGENT  User-Agent header for outgoing requests
    FOUNDATION_UPSTREAM_URL     Upstream records API base URL (serve)
    FOUNDATION_UPSTREAM_TOKEN   Upstream records API token (serve)
    FOUNDATION_LOG_LEVEL        Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from foundation_cli.commands import request, serve, validate
from foundation_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="foundation",
        description="Foundation CLI - Send HTTP requests, validate input, and serve the API.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./foundation.json or ~/.config/foundation/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- request command ---
    request_parser = subparsers.add_parser(
        "request",
        help="Send one HTTP request",
        description="Send an HTTP request. Only POST and PATCH attach the JSON payload.",
    )
    request_parser.add_argument("method", type=str, help="HTTP method (GET, POST, PUT, PATCH, UPDATE, DELETE, ...)")
    request_parser.add_argument("url", type=str, help="Request URL")
    request_parser.add_argument(
        "--header", "-H",
        action="append",
        default=[],
        help="Request header as 'Key: Value' (repeatable)",
    )
    data_group = request_parser.add_mutually_exclusive_group()
    data_group.add_argument("--data", "-d", type=str, default=None, help="JSON object payload")
    data_group.add_argument("--data-file", type=str, default=None, help="File holding a JSON object payload")
    request_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds (default: from config)",
    )
    request_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    request_parser.add_argument(
        "--receipts",
        action="store_true",
        default=False,
        help="Record and print a receipt for the call",
    )
    request_parser.add_argument("--debug", action="store_true", default=False, help="Print tracebacks")
    request_parser.set_defaults(func=request.request_cmd)

    # --- validate command ---
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a JSON document against rules",
        description="Validate a JSON object with pipe-delimited rules such as 'string|required'.",
    )
    validate_parser.add_argument("data", type=str, help="Path to a JSON object, or '-' for stdin")
    validate_parser.add_argument("--rules", type=str, default=None, help="JSON or YAML file mapping field to rules")
    validate_parser.add_argument(
        "--rule",
        action="append",
        default=[],
        help="Inline rule as 'field=rules' (repeatable)",
    )
    validate_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    validate_parser.set_defaults(func=validate.validate_cmd)

    # --- serve command ---
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the API server",
        description="Serve the FastAPI application with uvicorn.",
    )
    serve_parser.add_argument("--host", type=str, default="127.0.0.1", help="Bind host")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", default=False, help="Auto-reload on code changes")
    serve_parser.set_defaults(func=serve.serve_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show effective configuration (secrets redacted)",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="foundation.json",
        help="Path for config file (default: foundation.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (FOUNDATION_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: foundation config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=HTTP error status or validation failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level, log_file=args.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
