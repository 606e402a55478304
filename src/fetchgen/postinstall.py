"""Typer command for the install-time placement step.

Exposed as the ``fetch-gen-postinstall`` console script and as
``python -m fetchgen.postinstall``. Packagers and CI images run it right
after ``pip install`` so an unsupported platform aborts the installation
early with a clear message.

Usage::

    fetch-gen-postinstall
    fetch-gen-postinstall --package-root ./src/fetchgen --dest ./bin/fetch-gen
"""

from __future__ import annotations

import signal
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from fetchgen import __version__
from fetchgen.exit_codes import EXIT_CANCELLED, EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="fetch-gen-postinstall",
    help="Copy the platform-matched fetch-gen binary into the package root.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"fetch-gen {__version__}")
        raise typer.Exit()


@app.command()
def install(
    package_root: Optional[Path] = typer.Option(
        None,
        "--package-root",
        help="Directory containing the dist/ tree (defaults to the installed package).",
        file_okay=False,
    ),
    dest: Optional[Path] = typer.Option(
        None,
        "--dest",
        help="Where to place the binary (defaults to <package-root>/fetch-gen).",
        dir_okay=False,
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress the success message."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Place the fetch-gen binary for this host and mark it executable."""
    from fetchgen.config import load_settings
    from fetchgen.exceptions import FetchGenError
    from fetchgen.locator import locate_from_resources, resolve_package_root
    from fetchgen.output import OutputManager, error, set_output, success
    from fetchgen.placer import place_binary

    try:
        settings = load_settings()
        set_output(
            OutputManager(
                no_color=no_color or settings.no_color,
                quiet=quiet,
                verbose=settings.verbose,
            )
        )
        root = package_root or resolve_package_root(locate_from_resources(), settings)
        target = place_binary(root, dest=dest)
    except FetchGenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    success(f"Installed {target.name} to {target.parent}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """Console-script entry point for ``fetch-gen-postinstall``."""
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except Exception as exc:
        sys.stderr.write(f"Unexpected error: {exc}\n")
        sys.exit(EXIT_GENERIC_FAILURE)


if __name__ == "__main__":
    main()
