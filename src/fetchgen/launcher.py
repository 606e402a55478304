"""Binary resolution and supervised delegation.

One invocation walks this state machine and keeps nothing afterwards::

    Start -> ResolvePath -> BinaryMissing -> exit 1
                         -> BinarySpawn -> AwaitExit -> exit(child status | 1)

The child inherits the launcher's stdin, stdout and stderr file descriptors
directly; nothing is buffered, intercepted or rewritten. The launcher blocks
until the child terminates, with no timeout.

While the child runs, SIGTERM, SIGHUP, SIGQUIT and SIGINT delivered to the
launcher are forwarded to it so the child is not orphaned when the launcher
is stopped. Keyboard signals (SIGINT, SIGQUIT) are skipped when the launcher
is in the terminal's foreground process group, since the terminal already
sent them to the child; the launcher then just keeps waiting for its status.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import sys
import threading
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Optional

from fetchgen.exceptions import ChildSpawnError, FetchGenError, UnsupportedPlatformError
from fetchgen.exit_codes import EXIT_CANCELLED, EXIT_GENERIC_FAILURE
from fetchgen.models import BinaryLocation, ChildProcessResult
from fetchgen.platforms import binary_name_for, current_platform_key, host_arch, host_os

logger = logging.getLogger(__name__)

_FORWARDED_SIGNALS = ("SIGTERM", "SIGHUP", "SIGQUIT", "SIGINT")

# Generated by the terminal for the whole foreground process group.
_KEYBOARD_SIGNALS = frozenset(
    getattr(signal, name) for name in ("SIGINT", "SIGQUIT") if hasattr(signal, name)
)


def resolve_binary(
    package_root: Path,
    os_tag: Optional[str] = None,
    arch_tag: Optional[str] = None,
) -> BinaryLocation:
    """Compute where the delegated binary should live for this host.

    Args:
        package_root: Directory containing the ``dist/`` tree.
        os_tag: Operating-system tag; defaults to the running host.
        arch_tag: Architecture tag; defaults to the running host.

    Returns:
        A fresh :class:`~fetchgen.models.BinaryLocation`. The file is not
        checked here.
    """
    os_tag = os_tag if os_tag is not None else host_os()
    key = current_platform_key(os_tag, arch_tag)
    return BinaryLocation(
        package_root=Path(package_root),
        key=key,
        binary_name=binary_name_for(os_tag),
    )


def ensure_binary(location: BinaryLocation) -> BinaryLocation:
    """Return *location* if the binary exists there.

    Raises:
        UnsupportedPlatformError: If no file is present at the resolved path.
    """
    if not location.exists():
        raise UnsupportedPlatformError(location.key, str(location.path))
    return location


def _child_receives_keyboard_signals() -> bool:
    """Whether a keyboard signal already reached the child without our help.

    True on Windows, where console control events go to every attached
    process, and on POSIX when the launcher's process group is the
    terminal's foreground group. A SIGINT sent to the launcher's pid alone
    (``kill -INT``, ``timeout -s INT``, a supervising process) arrives
    without a foreground terminal and must be forwarded.
    """
    if os.name == "nt":
        return True
    for fd in (0, 1, 2):
        try:
            return os.tcgetpgrp(fd) == os.getpgrp()
        except OSError:
            continue
    return False


class _SignalForwarder:
    """Relay termination signals to the child for the duration of a ``with`` block.

    Handlers go in before the child is spawned so no signal can kill the
    launcher in between. Signals arriving before :meth:`attach` are queued
    and delivered once the child exists.
    """

    def __init__(self) -> None:
        self._proc: Optional[subprocess.Popen] = None
        self._pending: list[int] = []
        self._previous: dict[int, Any] = {}

    def __enter__(self) -> _SignalForwarder:
        if threading.current_thread() is not threading.main_thread():
            # signal.signal() only works from the main thread.
            return self
        for name in _FORWARDED_SIGNALS:
            signum = getattr(signal, name, None)
            if signum is not None:
                self._previous[signum] = signal.signal(signum, self._handle)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        for signum, handler in self._previous.items():
            # None means the handler was not installed from Python.
            if handler is not None:
                signal.signal(signum, handler)
        self._previous.clear()

    def attach(self, proc: subprocess.Popen) -> None:
        """Start relaying to *proc* and flush anything queued before it existed."""
        self._proc = proc
        pending, self._pending = self._pending, []
        for signum in pending:
            self._deliver(signum)

    def _handle(self, signum: int, frame: Any) -> None:  # noqa: ANN401
        if signum in _KEYBOARD_SIGNALS and _child_receives_keyboard_signals():
            return
        if self._proc is None:
            self._pending.append(signum)
            return
        self._deliver(signum)

    def _deliver(self, signum: int) -> None:
        assert self._proc is not None
        logger.debug("Forwarding signal %d to child pid %d", signum, self._proc.pid)
        try:
            self._proc.send_signal(signum)
        except ProcessLookupError:
            logger.debug("Child pid %d already exited", self._proc.pid)


def spawn(location: BinaryLocation, args: Sequence[str]) -> ChildProcessResult:
    """Run the binary with inherited stdio and wait for it to finish.

    Args:
        location: Where the binary lives; must already exist.
        args: Arguments forwarded verbatim, in order.

    Returns:
        The child's :class:`~fetchgen.models.ChildProcessResult`.

    Raises:
        ChildSpawnError: If the operating system could not start the binary.
    """
    command = [str(location.path), *args]
    # Anything the launcher buffered must land before the child writes.
    sys.stdout.flush()
    sys.stderr.flush()
    with _SignalForwarder() as forwarder:
        try:
            proc = subprocess.Popen(command)
        except OSError as exc:
            raise ChildSpawnError(f"Failed to start {location.path}: {exc}") from exc
        forwarder.attach(proc)
        returncode = proc.wait()
    return ChildProcessResult(returncode=returncode)


def run(
    package_root: Path,
    argv: Sequence[str],
    os_tag: Optional[str] = None,
    arch_tag: Optional[str] = None,
) -> int:
    """Resolve, verify and run the delegated binary; return the exit status.

    This is the convention-agnostic core shared by both entry points.

    Args:
        package_root: Directory containing the ``dist/`` tree.
        argv: Arguments for the binary, without the launcher's own name.
        os_tag: Operating-system tag override (defaults to the host).
        arch_tag: Architecture tag override (defaults to the host).

    Returns:
        The child's exit status, or ``1`` when the binary is missing, could
        not be started, or ended without a status.
    """
    from fetchgen.output import debug, error, info

    location = resolve_binary(package_root, os_tag, arch_tag)
    debug(f"Resolved binary path: {location.path}")

    try:
        ensure_binary(location)
    except UnsupportedPlatformError as exc:
        error(f"fetch-gen: {exc}")
        if not exc.key.is_supported:
            info(
                f"Host reports os={os_tag or host_os()!r} arch={arch_tag or host_arch()!r}, "
                "which has no prebuilt fetch-gen binary."
            )
        return exc.exit_code

    try:
        result = spawn(location, argv)
    except ChildSpawnError as exc:
        debug(str(exc))
        return exc.exit_code

    if result.signal is not None:
        debug(f"Child terminated by signal {result.signal}")
    return result.exit_status


def main(locate: Callable[[], Path], argv: Optional[Sequence[str]] = None) -> int:
    """Entry-point body shared by the console script and ``python -m``.

    Loads settings, installs the output manager, self-locates with *locate*,
    and delegates to :func:`run`.

    Args:
        locate: The entry convention's self-location strategy.
        argv: Arguments to forward; defaults to ``sys.argv[1:]``.

    Returns:
        The process exit status.
    """
    from fetchgen.config import load_settings
    from fetchgen.locator import resolve_package_root
    from fetchgen.output import OutputManager, error, set_output

    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = load_settings()
        set_output(OutputManager(no_color=settings.no_color, verbose=settings.verbose))
        package_root = resolve_package_root(locate(), settings)
        return run(package_root, args)
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        return EXIT_CANCELLED
    except FetchGenError as exc:
        error(str(exc))
        return exc.exit_code
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        return EXIT_GENERIC_FAILURE
