"""Main CLI entry point."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import click

from pixelboard import __version__

from .backends import DEFAULT_BACKEND
from .commands import devices_group, layout_group

logger = logging.getLogger(__name__)


def default_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where setup_logging() writes for these options."""
    if debug and not log_file:
        return Path.cwd() / "pixelboard-debug.log"
    if log_file:
        return log_file
    return Path.home() / ".pixelboard" / "logs" / "pixelboard.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Send log records to a rotating file (the TUI owns the terminal).

    Level: --debug or -vv gives DEBUG, -v gives INFO, otherwise WARNING.
    With --log-file, --log-level decides instead.

    Returns:
        Path of the log file
    """
    if log_file:
        level = getattr(logging, log_level.upper())
    elif debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    log_path = default_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # 5 files of 10MB each
    handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=10 * 1024 * 1024, backupCount=5
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    logger.info(f"Logging at {logging.getLevelName(level)} to {log_path}")
    return log_path


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="pixelboard")
@click.option(
    '--backend',
    '-b',
    type=str,
    default=DEFAULT_BACKEND,
    show_default=True,
    help='Backend class or factory as module:attr'
)
@click.option(
    '--devices',
    '-n',
    type=click.IntRange(min=0),
    default=1,
    help='Number of boards to simulate (simulated backend only, default: 1)'
)
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.pixelboard/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./pixelboard-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    backend: str,
    devices: int,
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Pixel Board - paint, save and project images onto RGB LED boards.

    Each board gets its own window. Click or drag on the matrix to paint
    with the pencil (p) or the eraser (e); pick the pencil color with k.

    \b
    Examples:
      # Start with one simulated board
      pixelboard

      # Simulate three boards
      pixelboard --devices 3

      # Use another backend
      pixelboard --backend mypackage.usb:UsbBackend

      # Enable debug logging
      pixelboard --debug

      # List boards
      pixelboard devices list

      # Check a saved layout
      pixelboard layout inspect ~/.pixelboard/layouts/smiley.json
    """
    from pixelboard.models import AppConfig

    config_obj = AppConfig.load_or_default(config_path)
    ctx.obj = {"backend": backend, "devices": devices, "config": config_obj}

    if ctx.invoked_subcommand is not None:
        return

    # Subcommands never need the TUI stack
    from pixelboard.core import BoardSession
    from pixelboard.tui import PixelBoardApp

    from .backends import create_backend

    # TUI uses stdout, so we log to files
    log_path = setup_logging(verbose, debug, log_file, log_level)
    logger.info("Starting Pixel Board")

    try:
        board_backend = create_backend(backend, devices, config_obj)
        session = BoardSession(board_backend, config_obj)
        PixelBoardApp(session).run()

    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        click.echo("\nShutting down...", err=True)
    except (click.Abort, click.BadParameter):
        raise
    except Exception as e:
        from pixelboard.exceptions import format_error_for_display

        logger.exception("Error running application")

        user_message, recovery_hint = format_error_for_display(e)

        click.echo("\n" + "=" * 70, err=True)
        click.echo(f"ERROR: {user_message}", err=True)
        click.echo("=" * 70, err=True)

        if recovery_hint:
            click.echo(f"\n{recovery_hint}", err=True)

        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
        click.echo("For logging options, run: pixelboard --help", err=True)
        sys.exit(1)


# Register utility commands
cli.add_command(devices_group)
cli.add_command(layout_group)

if __name__ == "__main__":
    cli()
