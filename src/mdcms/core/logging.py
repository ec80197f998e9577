"""Logging setup for the mdcms CLI.

Library modules log through ``logging.getLogger(__name__)``; the CLI routes
those records to stderr through rich.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False) -> None:
    """Install a rich handler on the ``mdcms`` logger.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
    """
    logger = logging.getLogger("mdcms")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        if getattr(handler, "_mdcms", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler._mdcms = True  # type: ignore[attr-defined]
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
