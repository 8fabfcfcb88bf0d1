"""Logging setup for the mortgage-actions command line."""

from __future__ import annotations

import logging
import sys

NOISY_LOGGERS = ("httpx", "httpcore", "hishel")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Send log records to stderr so stdout stays free for the JSON report.

    HTTP library chatter is only shown with ``verbose``.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=force,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
