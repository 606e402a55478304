"""Diagnostic output on stderr.

The delegated binary owns stdout and stderr while it runs; the launcher's own
messages are limited to the "no binary for this platform" diagnostic, the
post-install summary, and opt-in debug lines. All of them go to **stderr**
so that nothing the launcher prints can contaminate the child's data stream.

Colour control follows `clig.dev <https://clig.dev/>`_: ``NO_COLOR``,
``TERM=dumb`` and ``FETCH_GEN_NO_COLOR`` all disable Rich markup.

The module exposes two layers:

1. :class:`OutputManager` -- holds the Rich stderr console and the
   quiet/verbose flags. Installed via :func:`set_output`.
2. Module-level convenience functions (:func:`info`, :func:`error`,
   :func:`debug`, etc.) that delegate to the global ``OutputManager``.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape


class OutputManager:
    """Routes launcher diagnostics to stderr with optional Rich styling.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress informational and success messages.
        verbose: Enable debug-level messages.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
            soft_wrap=True,
        )

    def info(self, message: str) -> None:
        """Print an informational message. Suppressed by ``quiet``."""
        if not self._quiet:
            self._emit(message, None)

    def success(self, message: str) -> None:
        """Print a green success message. Suppressed by ``quiet``."""
        if not self._quiet:
            self._emit(message, "green")

    def error(self, message: str) -> None:
        """Print a bold-red error. Never suppressed."""
        if self._no_color:
            self._emit(f"Error: {message}", None)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Print a ``[debug]``-prefixed line. Only shown when ``verbose``."""
        if self._verbose:
            self._emit(f"[debug] {message}", "dim")

    def _emit(self, message: str, style: Optional[str]) -> None:
        if self._no_color:
            print(message, file=sys.stderr, flush=True)
        elif style:
            self._stderr.print(f"[{style}]{escape(message)}[/{style}]")
        else:
            self._stderr.print(escape(message))


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


def info(message: str) -> None:
    """Print info message to stderr via the global OutputManager."""
    get_output().info(message)


def error(message: str) -> None:
    """Print error to stderr via the global OutputManager."""
    get_output().error(message)


def success(message: str) -> None:
    """Print success message to stderr via the global OutputManager."""
    get_output().success(message)


def debug(message: str) -> None:
    """Print debug message to stderr via the global OutputManager."""
    get_output().debug(message)
