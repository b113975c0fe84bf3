"""
Shared context object for updateresolver CLI commands.

This module defines the Click context object used to share configuration
and runtime options between the CLI group and its subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from updateresolver.config import UpdateResolverConfig


class UpdateResolverContext:
    """Per-invocation state shared by updateresolver CLI commands.

    Attributes:
        config_path: Path to the configuration file, if one was used.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, or ``None`` before the group runs.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[UpdateResolverConfig] = None


#: Click decorator for injecting :class:`UpdateResolverContext` into commands.
pass_context = click.make_pass_decorator(UpdateResolverContext, ensure=True)
