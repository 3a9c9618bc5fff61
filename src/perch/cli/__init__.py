"""Perch CLI — serve the static responder or inspect its route table.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys

from perch.routes import ROUTE_SETS

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def _add_routes_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--routes",
        choices=sorted(ROUTE_SETS),
        default=None,
        help="Route set to register (default: full)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — a tiny static responder for htmx pages.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch serve ------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Bind and serve until SIGINT/SIGTERM")
    serve_parser.add_argument("--host", default=None, help="Bind host address (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number (default: 3000)")
    _add_routes_option(serve_parser)
    serve_parser.add_argument(
        "--assets",
        default=None,
        metavar="DIR",
        help="Serve assets from DIR instead of the bundled copies",
    )
    serve_parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: info)",
    )
    serve_parser.add_argument(
        "--access-log",
        action="store_true",
        help="Log every request",
    )

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the route table")
    _add_routes_option(routes_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from perch.cli._serve import run_serve

        run_serve(args)
    elif args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
