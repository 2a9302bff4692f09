"""Wren CLI — route listing, route checks, and the dev server.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import sys

from wren.log import configure_logging


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — static routes and single-use query results.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: the app's AppConfig.log_level)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List static routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- wren check -------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Verify static route files exist")
    check_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- wren run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the development server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    # Until the app is loaded and its configured level applies
    configure_logging(args.log_level or "warning")

    if args.command == "routes":
        from wren.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from wren.cli._routes import run_check

        run_check(args)
    elif args.command == "run":
        from wren.cli._run import run_server

        run_server(args)
