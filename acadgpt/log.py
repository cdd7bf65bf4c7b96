"""Logging setup shared by the CLI and the web interface."""

import logging

from rich.logging import RichHandler


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Route all log records through a rich console handler.

    Library modules only create loggers with ``logging.getLogger(__name__)``;
    entry points call this once.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
