"""Logging setup for the PipeDream command line."""

from __future__ import annotations

import logging
import sys

TRACE_LOGGER = "pipedream.trace"


def configure_logging(
    *, level: int = logging.WARNING, trace: bool = False, force: bool = False
) -> None:
    """Send log records to stderr so report lines on stdout stay clean.

    ``level`` applies to the root logger. ``trace=True`` lets execution trace
    lines (the ``[+Nms] - ...`` records) through at INFO even when the root
    level is quieter. Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=level,
        format="%(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
        force=force,
    )
    logging.getLogger(TRACE_LOGGER).setLevel(logging.INFO if trace else logging.NOTSET)
