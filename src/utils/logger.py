import logging
import os

from rich.console import Console
from rich.logging import RichHandler


class CenteredFormatter(logging.Formatter):
    longest_name_length = 12  # grows with the longest logger name seen

    def format(self, record):
        CenteredFormatter.longest_name_length = max(
            CenteredFormatter.longest_name_length, len(record.name)
        )
        record.name = record.name.center(CenteredFormatter.longest_name_length)
        return super().format(record)


_console = None  # shared by every handler, so the log file is opened once


def _get_console() -> Console:
    global _console
    if _console is None:
        # stderr draws over the TUI, so allow sending logs to a file instead
        log_file = os.getenv("SWIFTLOGI_LOG_FILE")
        if log_file:
            _console = Console(file=open(log_file, "a", encoding="utf-8"), width=120)
        else:
            _console = Console(stderr=True)
    return _console


def get_logger(name=None) -> logging.Logger:
    """
    Creates and returns a logger configured with RichHandler for rich output.
    Level is DEBUG when the DEBUG env var is set, INFO otherwise.
    """
    logger = logging.getLogger(name or "swiftlogi")
    log_level = logging.DEBUG if os.getenv("DEBUG") else logging.INFO
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = RichHandler(
            console=_get_console(),
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        handler.setFormatter(CenteredFormatter("[%(name)s]  %(message)s"))
        handler.setLevel(log_level)
        logger.addHandler(handler)

        logger.propagate = False
        logger.debug(f"Logger for '{logger.name}' initialized.")

    return logger
