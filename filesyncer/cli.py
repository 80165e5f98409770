"""CLI interface for FileSyncer."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from .cli_progress import CopyProgressDisplay
from .config import config
from .exceptions import ArgumentError, ConfigError
from .output import OutputFormatter
from .sync import SyncEngine, SyncFilter, SyncOptions, SyncResult

logger = logging.getLogger(__name__)


def get_or_prompt(value: Optional[str], label: str) -> str:
    """Return ``value`` or ask for it interactively.

    Args:
        value: Value given on the command line
        label: Name shown in the prompt

    Returns:
        The non-blank value

    Raises:
        ArgumentError: If the value is still blank after prompting
    """
    if value is None or not value.strip():
        try:
            value = click.prompt(label, default="", show_default=False)
        except click.Abort as e:
            raise ArgumentError(f"{label} is required") from e

    if value is None or not value.strip():
        raise ArgumentError(f"{label} is required")
    return value.strip()


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("filesyncer").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


def _run_sync(
    out: OutputFormatter,
    source: str,
    target: str,
    sync_filter: SyncFilter,
    options: SyncOptions,
    show_progress: bool,
) -> SyncResult:
    """Run the engine, with a progress display for real copies."""
    if not show_progress:
        return SyncEngine(out).run(source, target, sync_filter, options)

    with CopyProgressDisplay(out.console) as display:
        engine = SyncEngine(out, progress_callback=display.handle_event)
        return engine.run(source, target, sync_filter, options)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--Source", "--source", "-s", "source", help="Source directory")
@click.option("--Target", "--target", "-t", "target", help="Target directory")
@click.option(
    "--Include",
    "--include",
    "include",
    help="Comma-separated path segments to include (default: all)",
)
@click.option(
    "--Ignore",
    "--ignore",
    "ignore",
    help="Comma-separated path segments to ignore (e.g. bin,obj,.git)",
)
@click.option(
    "--LogFile",
    "--log-file",
    "log_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Append every output line to this file",
)
@click.option(
    "--DryRun",
    "--dry-run",
    "dry_run",
    is_flag=True,
    help="Show what would be synced without changing the target",
)
@click.option(
    "--CopyAcl",
    "--copy-acl",
    "copy_acl",
    is_flag=True,
    help="Compare and copy access control (permissions and ownership)",
)
@click.option(
    "--CopyDates",
    "--copy-dates",
    "copy_dates",
    is_flag=True,
    help="Compare and copy modification dates",
)
@click.option(
    "--workers",
    "-j",
    type=int,
    default=None,
    help="Number of parallel copy workers (default: 1)",
)
@click.option(
    "--chunk-size",
    type=int,
    default=None,
    help="Copy buffer size in KB (default: 80)",
)
@click.option("--no-progress", is_flag=True, help="Disable progress bars")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="filesyncer")
@click.pass_context
def main(
    ctx: Any,
    source: Optional[str],
    target: Optional[str],
    include: Optional[str],
    ignore: Optional[str],
    log_file: Optional[Path],
    dry_run: bool,
    copy_acl: bool,
    copy_dates: bool,
    workers: Optional[int],
    chunk_size: Optional[int],
    no_progress: bool,
    quiet: bool,
    json_output: bool,
    verbose: bool,
) -> None:
    """FileSyncer - mirror a source directory onto a target directory.

    Files that exist only at the target are deleted. Files that are missing
    at the target, or differ in size (and optionally date or access control),
    are copied. Every copy is written to a temporary file first and then
    renamed into place.

    Examples:
        filesyncer --Source /data --Target /mnt/backup/data
        filesyncer -s ./photos -t /media/usb/photos --DryRun
        filesyncer -s /src -t /dst --Ignore bin,obj,.git --CopyDates
    """
    _configure_logging(verbose)

    try:
        log_file = log_file or (Path(config.log_file) if config.log_file else None)
        include = include if include is not None else config.include
        ignore = ignore if ignore is not None else config.ignore
        workers = workers if workers is not None else config.workers
        chunk_bytes = (
            chunk_size * 1024 if chunk_size is not None else config.chunk_size
        )
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
        return

    try:
        out = OutputFormatter(json_output=json_output, quiet=quiet, log_file=log_file)
    except OSError as e:
        click.echo(f"Error: Cannot open log file {log_file}: {e}", err=True)
        ctx.exit(1)
        return

    try:
        try:
            source = get_or_prompt(source, "Source")
            target = get_or_prompt(target, "Target")
            options = SyncOptions(
                dry_run=dry_run,
                copy_access_control=copy_acl,
                copy_timestamps=copy_dates,
                chunk_size=chunk_bytes,
                max_workers=workers,
            )
        except (ArgumentError, ValueError) as e:
            out.exception(e)
            ctx.exit(1)
            return

        sync_filter = SyncFilter.from_strings(include, ignore)
        show_progress = not (no_progress or quiet or json_output or dry_run)

        result = _run_sync(out, source, target, sync_filter, options, show_progress)

        if json_output:
            out.output_json(result.to_dict())

        ctx.exit(result.exit_code)
    except KeyboardInterrupt:
        out.warning("\nSync cancelled by user")
        ctx.exit(130)  # Standard exit code for SIGINT
    finally:
        out.close()


if __name__ == "__main__":
    main()
