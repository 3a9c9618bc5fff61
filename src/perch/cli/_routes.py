"""``perch routes`` — print the configured route table."""

import argparse
import sys

from perch.errors import ConfigurationError
from perch.routes import NOT_FOUND, select_routes


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATH, STATUS, CONTENT-TYPE, and ASSET for each route.

    The 404 fallback is listed last as ``* *``.
    """
    try:
        entries = select_routes(args.routes or "full")
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [
        (
            entry.method,
            entry.path,
            str(entry.status),
            entry.content_type or "-",
            entry.asset or "-",
        )
        for entry in (*entries, NOT_FOUND)
    ]
    header = ("METHOD", "PATH", "STATUS", "CONTENT-TYPE", "ASSET")
    widths = [max(len(row[i]) for row in (header, *rows)) for i in range(len(header))]

    fmt = "  ".join(f"{{:<{width}}}" for width in widths[:-1]) + "  {}"
    print(fmt.format(*header))
    print("-" * min(sum(widths) + 2 * (len(widths) - 1), 80))
    for row in rows:
        print(fmt.format(*row))
