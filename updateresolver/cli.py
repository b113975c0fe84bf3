"""
Command-line interface for updateresolver.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from updateresolver.config import load_config
from updateresolver.commands.resolve import resolve
from updateresolver.__version__ import __version__
from updateresolver.constants import (
    CONFIG_ENV_VAR,
    EXIT_ERROR,
    EXIT_INTERRUPTED,
    EXIT_NO_UPDATE,
)
from updateresolver.context import UpdateResolverContext
from updateresolver.exceptions import ConfigError, UpdateResolverError
from updateresolver.utils.logger import get_logger, setup_logging
from updateresolver.utils.console import (
    print_error,
    print_warning,
    reconfigure_console,
)

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar=CONFIG_ENV_VAR,
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
)
@click.version_option(
    version=__version__,
    prog_name="updateresolver",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """updateresolver: find out whether a newer release exists.

    \b
    Available commands:
      updateresolver resolve       Resolve an update from a release manifest

    \b
    Examples:
      updateresolver resolve releases.json --current 1.2.0
      updateresolver -v resolve releases.json --distribution myapp --stable-only
    """
    _configure_logging(verbose)

    # Respect NO_COLOR for Rich and the log formatter
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        ctx.exit(EXIT_ERROR)

    resolver_ctx = UpdateResolverContext()
    resolver_ctx.config_path = config or loaded_config.source_path
    resolver_ctx.color = color
    resolver_ctx.verbose = verbose
    resolver_ctx.config = loaded_config
    ctx.obj = resolver_ctx

    logger.debug("updateresolver v%s", __version__)
    logger.debug("Config path: %s", resolver_ctx.config_path)
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose > 1)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


cli.add_command(resolve)


def main() -> int:
    """Main entry point for the updateresolver CLI.

    Returns:
        Exit code:
            0   No update available
            1   Error
            2   Usage error (Click)
            3   Update available
            130 Interrupted by user (Ctrl+C)
    """
    try:
        rv = cli(standalone_mode=False)
        return rv if isinstance(rv, int) else EXIT_NO_UPDATE

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.Abort:
        print_warning("Operation cancelled by user")
        return EXIT_INTERRUPTED

    except UpdateResolverError as exc:
        print_error(str(exc))
        logger.debug("UpdateResolverError details: %s", exc.details or "<none>", exc_info=True)
        return EXIT_ERROR

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return EXIT_INTERRUPTED

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
