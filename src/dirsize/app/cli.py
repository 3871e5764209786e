"""Command-line interface for dirsize."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from dirsize.core.aggregator import measure
from dirsize.core.config import ConfigurationError, MainConfig, load_main_config
from dirsize.utils.logging import configure_logging, measurement_context

logger = logging.getLogger(__name__)

PROG_NAME = "dirsize"

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("dirsize")
except PackageNotFoundError:
    __version__ = "unknown"


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Log level value to validate

    Returns:
        Normalized log level (uppercase)

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()

    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if normalized_value not in valid_levels:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(valid_levels))}'
        )

    return normalized_value


def _load_config(config_path: Path | None) -> MainConfig:
    if config_path is None:
        return MainConfig()
    try:
        return load_main_config(config_path)
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e


@click.command(name=PROG_NAME)
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(path_type=Path),
)
@click.option(
    "--abbreviated", "-a",
    is_flag=True,
    help="Use abbreviated unit labels (K, M, G, ...)",
)
@click.option(
    "--bytes", "-b", "raw_bytes",
    is_flag=True,
    help="Print raw byte counts instead of human-readable sizes",
)
@click.option(
    "--workers", "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Number of worker threads scanning directories concurrently",
)
@click.option(
    "--config", "-c",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.option(
    "--log-level", "-l",
    type=str,
    default=None,
    callback=validate_log_level,
    help="Logging verbosity level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
@click.version_option(version=__version__, prog_name=PROG_NAME)
def cli(
    paths: tuple[Path, ...],
    abbreviated: bool,
    raw_bytes: bool,
    workers: int | None,
    config: Path | None,
    log_level: str | None,
) -> None:
    """Print the total size of each PATH.

    Directories are measured recursively. Symbolic links are never followed
    and count as zero bytes. Entries beneath PATH that cannot be read are
    skipped, so the size of a partially readable tree is an undercount.

    Examples:

        # Full unit labels
        dirsize ~/Downloads

        # Abbreviated labels, 8 worker threads
        dirsize -a -j 8 /var/log /srv

        # Raw byte counts
        dirsize --bytes data.bin
    """
    settings = _load_config(config)

    _ = configure_logging(
        log_level=log_level or settings.application.log_level,
        enable_syslog=settings.application.syslog_enabled,
    )

    use_abbreviated = abbreviated or settings.measurement.abbreviated
    max_workers = workers or settings.measurement.max_workers

    failed = False
    for path in paths:
        with measurement_context(path):
            if not _print_size(path, max_workers=max_workers, abbreviated=use_abbreviated, raw_bytes=raw_bytes):
                failed = True

    if failed:
        raise click.exceptions.Exit(1)


def _print_size(path: Path, *, max_workers: int | None, abbreviated: bool, raw_bytes: bool) -> bool:
    """Measure one path and echo its size line. Returns False if it could not be measured."""
    try:
        report = measure(path, max_workers=max_workers)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        click.echo(f"{PROG_NAME}: cannot access '{path}': {reason}", err=True)
        return False

    if not report.complete:
        logger.warning(
            "Size of %s is partial: %d entries and %d directories could not be read",
            path,
            report.skipped_entries,
            report.unreadable_directories,
        )

    size = str(report.total_bytes) if raw_bytes else report.human(abbreviated)
    click.echo(f"{size}\t{path}")
    return True
