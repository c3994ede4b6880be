"""Wicket CLI — run the API server or inspect its route table.

Entry point registered as ``wicket`` in ``pyproject.toml``::

    [project.scripts]
    wicket = "wicket.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wicket`` command."""
    parser = argparse.ArgumentParser(
        prog="wicket",
        description="Wicket: a small guarded JSON API server.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wicket run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the API server")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: WICKET_LOG_LEVEL or info)",
    )
    run_parser.add_argument(
        "--log-format",
        default=None,
        choices=["text", "json"],
        help="Log format (default: WICKET_LOG_FORMAT or text)",
    )

    # -- wicket routes ----------------------------------------------------
    subparsers.add_parser("routes", help="List declared routes")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from wicket.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from wicket.cli._routes import run_routes

        run_routes(args)
