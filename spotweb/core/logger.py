"""
Logging configuration for spotweb.

The library itself never installs handlers: the 'spotweb' logger only gets a
NullHandler (see spotweb/__init__.py), so applications decide where records
go. setup_logging() is the opinionated configuration used by the CLI:
    - Console: tqdm-compatible, colored, INFO and above (DEBUG with --verbose)
    - log_full_<timestamp>.log: Every record (DEBUG and above)
    - log_errors_<timestamp>.log: Only ERROR and CRITICAL records
    - failed_requests_<timestamp>.log: Requests that ended with an ErrorResult

File outputs are only created when a log directory is given.

Usage:
    from spotweb.core.logger import setup_logging, get_logger

    setup_logging("DEBUG", log_dir=Path("~/.spotweb/logs").expanduser())
    logger = get_logger(__name__)

    logger.info("Fetching playlist")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


LOG_FULL_PREFIX = "log_full"
LOG_ERRORS_PREFIX = "log_errors"
FAILED_REQUESTS_PREFIX = "failed_requests"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log format for console output (compact, tqdm-friendly)
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that colors the level name of console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        colored_levelname = f"{color}{record.levelname}{Colors.RESET}"
        return f"{colored_levelname}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Console handler that writes through tqdm.write().

    The CLI shows a progress bar while walking large playlists; plain
    writes to stderr would tear the bar apart, tqdm.write() prints the
    message above it instead.

    Attributes:
        stream: The output stream (defaults to sys.stderr).
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class FailedRequestHandler(logging.Handler):
    """
    Handler that collects requests which ended with an ErrorResult.

    Listens for records carrying the extra fields set by
    log_request_failure() and writes them to the failed requests file:

        GET https://api.spotify.com/v1/me/player
        404 No active device found (attempts: 1)

    The handler looks for these extra fields:
        - 'failed_request_method': HTTP method
        - 'failed_request_url': Request URL
        - 'failed_request_status': Final HTTP status code
        - 'failed_request_message': Message from the error body
        - 'failed_request_attempts': Number of attempts made (optional)

    Records without them are ignored.

    Attributes:
        report_path: Path to the failed requests file.
        report_file: Open file handle (None until open() is called).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "failed_request_url"):
            return

        if self.report_file is None:
            return

        try:
            method = getattr(record, "failed_request_method", "GET")
            url = getattr(record, "failed_request_url", "")
            status = getattr(record, "failed_request_status", 0)
            message = getattr(record, "failed_request_message", "") or "no message"
            attempts = getattr(record, "failed_request_attempts", None)

            line = f"{status} {message}"
            if attempts is not None:
                line += f" (attempts: {attempts})"

            self.report_file.write(f"{method} {url}\n")
            self.report_file.write(f"{line}\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only allows ERROR and CRITICAL level records.

    Used by the error log file handler to exclude DEBUG, INFO, and WARNING.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(
    level: str | int = "INFO",
    log_dir: Path | None = None,
    console: bool = True
) -> None:
    """
    Configure the root logger for command-line use.

    Call once at startup. Library users embedding spotweb in their own
    application should configure logging themselves instead.

    Args:
        level: Console level name or number. File handlers always log DEBUG.
        log_dir: Directory for the log files. If None, no files are written.
                 Created if it doesn't exist.
        console: Whether to attach the tqdm-compatible console handler.

    Raises:
        ValueError: If level is not a known logging level name.

    Behavior:
        1. Reset the root logger handlers and set it to DEBUG
        2. Attach the colored console handler at the requested level
        3. If log_dir is given, create it and attach the full log, the
           error-only log and the failed requests report, each with a
           timestamp in the file name
    """
    if isinstance(level, str):
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            raise ValueError(f"Unknown log level: {level}")
    else:
        numeric_level = level

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if console:
        console_handler = TqdmLoggingHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredConsoleFormatter(CONSOLE_LOG_FORMAT))
        root_logger.addHandler(console_handler)

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    full_handler = logging.FileHandler(
        log_dir / f"{LOG_FULL_PREFIX}_{timestamp}.log", mode="w", encoding="utf-8"
    )
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_handler = logging.FileHandler(
        log_dir / f"{LOG_ERRORS_PREFIX}_{timestamp}.log", mode="w", encoding="utf-8"
    )
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    failed_handler = FailedRequestHandler(log_dir / f"{FAILED_REQUESTS_PREFIX}_{timestamp}.log")
    failed_handler.open()
    root_logger.addHandler(failed_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'spotweb.http.executor'.

    Returns:
        logging.Logger: A logger instance.
    """
    return logging.getLogger(name)


def log_request_failure(
    logger: logging.Logger,
    method: str,
    url: str,
    status_code: int,
    message: str,
    attempts: int | None = None
) -> None:
    """
    Log a request that ended with an ErrorResult.

    Logs a WARNING (a terminal service failure is a normal return value,
    not a crash) and attaches the extra fields FailedRequestHandler picks up.

    Args:
        logger: The logger to use for the message.
        method: HTTP method of the request.
        url: Request URL.
        status_code: Final HTTP status code.
        message: Message extracted from the error body.
        attempts: Number of attempts made, including retries.

    Example:
        log_request_failure(
            logger, "PUT", "https://api.spotify.com/v1/me/player/pause",
            404, "No active device found", attempts=1
        )
    """
    logger.warning(
        f"{method} {url} failed with {status_code}: {message or 'no message'}",
        extra={
            "failed_request_method": method,
            "failed_request_url": url,
            "failed_request_status": status_code,
            "failed_request_message": message,
            "failed_request_attempts": attempts,
        }
    )


def shutdown_logging() -> None:
    """
    Flush, close and detach every handler of the root logger.

    Typically called in a finally block at CLI exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        root_logger.removeHandler(handler)
