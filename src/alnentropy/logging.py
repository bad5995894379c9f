"""
Logging configuration for alnentropy.

Progress and per-file results go to stderr with a bracketed, colour-coded
level. Unexpected-character warnings are raised from the tally workers, so
debug output and the optional log file name the thread that produced each
message.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

CONSOLE_FORMAT = "%(levelname)s %(message)s"
DEBUG_FORMAT = "%(levelname)s %(threadName)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"

RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[0;90m",
    logging.INFO: "\033[0;32m",
    logging.WARNING: "\033[1;33m",
    logging.ERROR: "\033[0;31m",
    logging.CRITICAL: "\033[0;31m",
}


class ColoredFormatter(logging.Formatter):
    """
    Formatter that brackets the level name, coloured when writing to a terminal.

    Args:
        fmt: Format string
        use_colors: Colour the level name; ignored unless stream is a TTY
        stream: Stream the owning handler writes to (default: stderr)
    """

    def __init__(
        self,
        fmt: Optional[str] = None,
        use_colors: bool = True,
        stream: Optional[TextIO] = None,
    ):
        super().__init__(fmt or CONSOLE_FORMAT)
        stream = stream if stream is not None else sys.stderr
        self.use_colors = use_colors and hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        # Other handlers see the same record
        levelname = record.levelname
        if self.use_colors:
            color = LEVEL_COLORS.get(record.levelno, RESET)
            record.levelname = f"{color}[{levelname}]{RESET}"
        else:
            record.levelname = f"[{levelname}]"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(
    name: str = "alnentropy",
    log_file: Optional[Union[str, Path]] = None,
    verbose: bool = False,
    use_colors: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the alnentropy logger for a command-line run.

    Handlers from an earlier call are closed and replaced. With verbose,
    the console shows debug messages tagged with the worker thread name.

    Args:
        name: Logger name (default: "alnentropy")
        log_file: Optional path to a plain-text log file, always at DEBUG
        verbose: Enable debug output on the console
        use_colors: Colour console level names when writing to a terminal
        stream: Console stream (default: stderr)

    Returns:
        Configured logger instance
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    stream = stream if stream is not None else sys.stderr

    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(console_level)
    console_fmt = DEBUG_FORMAT if verbose else CONSOLE_FORMAT
    console_handler.setFormatter(ColoredFormatter(console_fmt, use_colors=use_colors, stream=stream))
    logger.addHandler(console_handler)

    logger_level = console_level
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
        logger_level = logging.DEBUG

    logger.setLevel(logger_level)
    return logger
