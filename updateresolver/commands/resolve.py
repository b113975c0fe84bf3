"""Resolve command implementation for updateresolver.

Reads a local release manifest, runs it through an
:class:`~updateresolver.core.UpdateResolver` configured from the loaded
configuration and the command-line flags, and reports whether a newer
release than the current version exists.

Typical usage::

    # Compare against an explicit version
    $ updateresolver resolve releases.json --current 1.2.0

    # Use the installed version of a distribution, ignore pre-releases
    $ updateresolver resolve releases.json --distribution myapp --stable-only

    # Machine-readable output
    $ updateresolver resolve releases.json --current 1.2.0 --format json
"""

from __future__ import annotations

import json
import asyncio
import dataclasses
from pathlib import Path
from typing import Any, Dict, Optional

import click

from updateresolver.config import UpdateResolverConfig
from updateresolver.constants import (
    COMPARATOR_NAMES,
    EXIT_ERROR,
    EXIT_NO_UPDATE,
    EXIT_UPDATE_AVAILABLE,
)
from updateresolver.context import UpdateResolverContext, pass_context
from updateresolver.core import (
    ManifestUpdateChecker,
    UpdateResolver,
    distribution_version_provider,
)
from updateresolver.exceptions import ResolveFailedError, UpdateResolverError
from updateresolver.models import Update
from updateresolver.utils import (
    colorize_update_type,
    get_logger,
    get_update_type,
    print_error,
    print_success,
    print_table,
)

logger = get_logger("commands.resolve")


@click.command()
@click.argument(
    "manifest",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--current",
    "current_version",
    metavar="VERSION",
    help="Version to compare candidates against.",
)
@click.option(
    "--distribution",
    metavar="NAME",
    help="Read the current version from an installed distribution.",
)
@click.option(
    "--comparator",
    type=click.Choice(list(COMPARATOR_NAMES), case_sensitive=False),
    default=None,
    help="Version ordering (default: from config, else semver).",
)
@click.option(
    "--stable-only/--include-prereleases",
    default=None,
    help="Drop pre-release candidates.",
)
@click.option(
    "--python-compatible-only/--any-python",
    default=None,
    help="Drop candidates whose requires_python excludes this interpreter.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
@click.pass_context
def resolve(
    click_ctx: click.Context,
    ctx: UpdateResolverContext,
    manifest: Path,
    current_version: Optional[str],
    distribution: Optional[str],
    comparator: Optional[str],
    stable_only: Optional[bool],
    python_compatible_only: Optional[bool],
    output_format: str,
) -> None:
    """Resolve whether MANIFEST lists a release newer than the current version.

    Exactly one of ``--current`` or ``--distribution`` is required.

    \b
    Exits:
      0  no update available
      1  the check failed
      3  an update is available
    """
    if bool(current_version) == bool(distribution):
        raise click.UsageError("Pass exactly one of --current or --distribution.")

    config = _effective_config(
        ctx.config or UpdateResolverConfig(),
        comparator=comparator,
        stable_only=stable_only,
        python_compatible_only=python_compatible_only,
    )
    logger.debug("Effective configuration: %s", config.to_log_dict())

    provider = distribution_version_provider(distribution) if distribution else None
    if provider is not None:
        try:
            current_version = provider()
        except LookupError as exc:
            print_error(str(exc))
            click_ctx.exit(EXIT_ERROR)

    resolver = UpdateResolver.from_config(config, ManifestUpdateChecker(manifest))

    try:
        update = asyncio.run(resolver.resolve_async(current_version))
    except ResolveFailedError as exc:
        print_error(exc.error_string or str(exc))
        click_ctx.exit(EXIT_ERROR)
    except UpdateResolverError as exc:
        print_error(str(exc))
        click_ctx.exit(EXIT_ERROR)

    if output_format.lower() == "json":
        click.echo(json.dumps(_to_json(current_version, update), indent=2))
    else:
        _print_report(current_version, update)

    click_ctx.exit(EXIT_UPDATE_AVAILABLE if update else EXIT_NO_UPDATE)


def _effective_config(
    base: UpdateResolverConfig,
    **overrides: Any,
) -> UpdateResolverConfig:
    """Apply CLI flags that were given (not ``None``) on top of *base*."""
    given = {key: value for key, value in overrides.items() if value is not None}
    if "comparator" in given:
        given["comparator"] = given["comparator"].lower()
    return dataclasses.replace(base, **given)


def _to_json(current_version: str, update: Optional[Update]) -> Dict[str, Any]:
    return {
        "current_version": current_version,
        "update_available": update is not None,
        "update_type": get_update_type(current_version, update.version) if update else None,
        "update": update.to_dict() if update else None,
    }


def _print_report(current_version: str, update: Optional[Update]) -> None:
    if update is None:
        print_success(f"{current_version} is up to date")
        return

    row = {
        "Current": current_version,
        "Available": update.version,
        "Type": colorize_update_type(get_update_type(current_version, update.version)),
    }
    if update.download_url:
        row["Download"] = update.download_url
    print_table([row], title="Update available")
