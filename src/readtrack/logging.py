"""Logging setup for readtrack.

Copyright (c) 2022 Pixelgen Technologies AB.
"""

import logging
import sys
import typing
import warnings
from pathlib import Path

import click

from readtrack.types import PathType

root_logger = logging.getLogger()
readtrack_root_logger = logging.getLogger("readtrack")


# Silence deprecation warnings raised on import by the plotting stack
warnings.filterwarnings("ignore", category=DeprecationWarning, module="seaborn")

# Disable matplot lib debug logs (that will clog all debug logs)
logging.getLogger("matplotlib.font_manager").setLevel(logging.ERROR)
logging.getLogger("matplotlib.ticker").setLevel(logging.ERROR)


# ------------------------------------------------------------
# Click logging
# ------------------------------------------------------------

DEFAULT_LEVEL = logging.INFO


class StyleDict(typing.TypedDict):
    """Style dictionary for kwargs to `click.style`."""

    fg: str


class ColorFormatter(logging.Formatter):
    """Click formatter with colored levels."""

    colors: dict[str, StyleDict] = {
        "debug": StyleDict(fg="blue"),
        "info": StyleDict(fg="green"),
        "warning": StyleDict(fg="yellow"),
        "error": StyleDict(fg="red"),
        "exception": StyleDict(fg="red"),
        "critical": StyleDict(fg="red"),
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format a record with colored level.

        :param record: The record to format.
        :returns str: A formatted log record.
        """
        if not record.exc_info:
            level = record.levelname.lower()
            msg = record.getMessage()
            if level in self.colors:
                timestamp = self.formatTime(record, self.datefmt)
                colored_level = click.style(
                    f"{level.upper():<10}", **self.colors[level]
                )
                prefix = f"{timestamp} [{colored_level}]  "
                msg = "\n".join(prefix + x for x in msg.splitlines())
            return msg
        return logging.Formatter.format(self, record)


class DefaultCliFormatter(logging.Formatter):
    """Click formatter for non-verbose output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a record for CLI output."""
        if not record.exc_info:
            level = record.levelname.lower()
            msg = record.getMessage()

            if level == "info":
                return msg

            return f"{level.upper()}: {msg}"
        return logging.Formatter.format(self, record)


class ClickHandler(logging.Handler):
    """Click logging handler.

    Messages are forwarded to the console using `click.echo`.

    :param use_stderr: Log to sys.stderr instead of sys.stdout.
    """

    def __init__(self, use_stderr: bool = True):
        """Initialize the click handler."""
        super().__init__()
        self._use_stderr = use_stderr

    def emit(self, record: logging.LogRecord) -> None:
        """Do whatever it takes to actually log the specified logging record."""
        try:
            msg = self.format(record)
            click.echo(msg, err=self._use_stderr)
        except Exception:
            self.handleError(record)


class LoggingSetup:
    """Logging setup for the readtrack command line.

    Messages go to the console and, if a log file is given, to that file.
    The previous handlers of the logger are restored on exit.
    """

    def __init__(
        self,
        log_file: PathType | None = None,
        verbose: bool = False,
        logger: logging.Logger | None = None,
    ):
        """Initialize the logging setup.

        :param log_file: the filename of the log output
        :param verbose: enable verbose logging and console output
        :param logger: the logger to configure, default is the root logger
        """
        self.log_file = Path(log_file) if log_file is not None else None
        self.verbose = verbose
        self._root_logger = logger or logging.getLogger()
        self._file_handler: logging.FileHandler | None = None
        self._previous_handlers: list[logging.Handler] = []
        self._previous_level = self._root_logger.level

    def initialize(self):
        """Configure logging for the console and the optional log file."""
        self._previous_handlers = list(self._root_logger.handlers)
        self._previous_level = self._root_logger.level

        handlers: list[logging.Handler] = []
        self._root_logger.setLevel(logging.DEBUG if self.verbose else DEFAULT_LEVEL)

        if self.log_file:
            self._file_handler = logging.FileHandler(str(self.log_file), mode="w")
            self._file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(name)s %(levelname)-8s %(message)s")
            )
            handlers.append(self._file_handler)

        console_handler = ClickHandler()
        if self.verbose:
            console_handler.setFormatter(ColorFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
        else:
            console_handler.setFormatter(DefaultCliFormatter())

        handlers.append(console_handler)
        self._root_logger.handlers = handlers

    def close(self):
        """Flush and close the log file and restore the previous handlers."""
        if self._file_handler is not None:
            self._file_handler.flush()
            self._file_handler.close()
            self._file_handler = None

        self._root_logger.handlers = self._previous_handlers
        self._root_logger.setLevel(self._previous_level)

    def __enter__(self):
        """Enter the context manager.

        This will initialize the logging setup.
        """
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """Exit the context manager.

        Unhandled exceptions are logged before the handlers are closed.
        """
        if exc_type is not None and not issubclass(
            exc_type, (KeyboardInterrupt, click.exceptions.Exit, click.ClickException)
        ):
            log_unhandled_exception(exc_type, exc_value, traceback)
        self.close()
        # Reraise exception higher up the stack
        return False


def log_unhandled_exception(exc_type, exc_value, exc_traceback):
    """Log an exception that was not handled by readtrack itself."""
    readtrack_root_logger.critical("Unhandled exception of type: %s", exc_type.__name__)
    readtrack_root_logger.critical("Exception message was: %s", exc_value)
    readtrack_root_logger.error(
        "Traceback", exc_info=(exc_type, exc_value, exc_traceback)
    )


def handle_unhandled_exception(exc_type, exc_value, exc_traceback):
    """Handle "unhandled" exceptions."""
    if issubclass(exc_type, KeyboardInterrupt):
        # Will call default excepthook
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    # Create a critical level log message with info from the except hook.
    readtrack_root_logger.critical(
        "Unhandled exception", exc_info=(exc_type, exc_value, exc_traceback)
    )


# Assign the excepthook to the handler
sys.excepthook = handle_unhandled_exception
