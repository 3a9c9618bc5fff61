"""``perch serve`` — bind the socket and serve until a shutdown signal.

Any ``PerchError`` raised before or during serving (bad config, missing
asset, address in use, signal install failure) ends the process with
exit status 1 and a one-line message on stderr.
"""

import argparse
import dataclasses
import logging
import sys

from perch.config import AppConfig
from perch.errors import PerchError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def config_from_args(args: argparse.Namespace, base: AppConfig | None = None) -> AppConfig:
    """Apply CLI overrides on top of *base* (default ``AppConfig()``)."""
    overrides = {
        "host": args.host,
        "port": args.port,
        "routes": args.routes,
        "asset_dir": args.assets,
        "log_level": args.log_level,
        "access_log": args.access_log or None,
    }
    return dataclasses.replace(
        base or AppConfig(),
        **{name: value for name, value in overrides.items() if value is not None},
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT, level=level.upper())


def run_serve(args: argparse.Namespace) -> None:
    """Build the responder app and hand it to a ``Lifecycle``."""
    config = config_from_args(args)
    configure_logging(config.log_level)

    from perch.responder import create_app
    from perch.server.lifecycle import Lifecycle

    try:
        config.validate()
        app = create_app(config)
        Lifecycle(app, config).run()
    except PerchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
