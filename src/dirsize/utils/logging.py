"""Logging setup for the dirsize command-line front end.

Records are tagged with the measurement they belong to. The CLI opens a
``measurement_context`` for each PATH argument; the context's id and path
live in ContextVars, so every record emitted while that path is measured
carries them, including records from ``asyncio.to_thread`` workers.

Handlers are attached to the ``dirsize`` package logger only; the root
logger of an embedding application is left alone. Log output goes to
stderr so it never mixes with the size lines printed on stdout.
"""

import contextvars
import logging
import logging.handlers
import sys
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Final, override

PACKAGE_LOGGER: Final[str] = "dirsize"

# Short enough to read in a terminal, unique enough within one run
MEASUREMENT_ID_LENGTH: Final[int] = 8

CONSOLE_LOG_FORMAT: Final[str] = "dirsize: %(levelname)s: %(message)s"

# DEBUG output shows which pool worker emitted a record
VERBOSE_LOG_FORMAT: Final[str] = (
    "%(asctime)s dirsize[%(threadName)s] %(levelname)s %(name)s [%(measurement_id)s] %(message)s"
)

SYSLOG_LOG_FORMAT: Final[str] = "%(levelname)s [%(measurement_id)s] %(measured_path)s: %(message)s"

DEFAULT_SYSLOG_ADDRESS: Final[str] = "/dev/log"


@dataclass(slots=True, frozen=True)
class Measurement:
    """Identity of one top-level measurement, as seen by log records."""

    measurement_id: str
    path: str


current_measurement: contextvars.ContextVar[Measurement | None] = contextvars.ContextVar(
    "current_measurement",
    default=None,
)


class MeasurementFilter(logging.Filter):
    """Stamp ``measurement_id`` and ``measured_path`` onto every record.

    Records emitted outside a measurement get ``-`` for both.
    """

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        measurement = current_measurement.get()
        record.measurement_id = measurement.measurement_id if measurement else "-"
        record.measured_path = measurement.path if measurement else "-"
        return True


@contextmanager
def measurement_context(path: object) -> Generator[Measurement, None, None]:
    """Tag log records emitted inside the block with a fresh measurement id.

    Args:
        path: The top-level path being measured

    Yields:
        The active Measurement

    Example:
        >>> with measurement_context("/srv") as measurement:
        ...     logging.getLogger("dirsize").warning("partial")
    """
    measurement = Measurement(
        measurement_id=uuid.uuid4().hex[:MEASUREMENT_ID_LENGTH],
        path=str(path),
    )
    token = current_measurement.set(measurement)
    try:
        yield measurement
    finally:
        current_measurement.reset(token)


def get_current_measurement() -> Measurement | None:
    """Return the measurement active in this context, if any."""
    return current_measurement.get()


def parse_log_level(log_level: str) -> int:
    """Convert a level name such as ``"warning"`` to its numeric value.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    level = logging.getLevelNamesMapping().get(log_level.strip().upper())
    if level is None:
        msg = f"Unknown log level: {log_level!r}"
        raise ValueError(msg)
    return level


def configure_logging(
    *,
    log_level: str = "WARNING",
    enable_syslog: bool = False,
    syslog_address: str = DEFAULT_SYSLOG_ADDRESS,
    enable_console: bool = True,
) -> logging.Logger:
    """Attach dirsize's handlers to the package logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_syslog: Also send records to syslog
        syslog_address: Syslog socket address
        enable_console: Write records to stderr

    Returns:
        The configured ``dirsize`` logger

    Raises:
        ValueError: If ``log_level`` is not a standard level name
    """
    level = parse_log_level(log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    measurement_filter = MeasurementFilter()

    if enable_console:
        console_format = VERBOSE_LOG_FORMAT if level <= logging.DEBUG else CONSOLE_LOG_FORMAT
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(console_format))
        console_handler.addFilter(measurement_filter)
        package_logger.addHandler(console_handler)

    if enable_syslog:
        try:
            syslog_handler = logging.handlers.SysLogHandler(
                address=syslog_address,
                facility=logging.handlers.SysLogHandler.LOG_USER,
            )
        except OSError as exc:
            # Syslog not available (e.g., containers); keep console only
            package_logger.warning("Could not connect to syslog at %s: %s", syslog_address, exc)
        else:
            syslog_handler.ident = "dirsize: "
            syslog_handler.setFormatter(logging.Formatter(SYSLOG_LOG_FORMAT))
            syslog_handler.addFilter(measurement_filter)
            package_logger.addHandler(syslog_handler)

    return package_logger
