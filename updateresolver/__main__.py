"""
Executable module for updateresolver.

Running:
    python -m updateresolver

is equivalent to:
    updateresolver
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Explain why the CLI could not be loaded."""
    sys.stderr.write("updateresolver CLI failed to start.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Entrypoint for ``python -m updateresolver``.

    Returns:
        Exit code returned by the CLI, or 1 if it could not be imported.
    """
    try:
        # Import lazily so click and rich load only when the CLI runs
        from updateresolver.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
