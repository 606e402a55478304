"""Exception hierarchy for fetchgen.

All exceptions inherit from :class:`FetchGenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`fetchgen.exit_codes`.
The entry points catch ``FetchGenError``, print the message to stderr and
exit with that code.

Subclass hierarchy::

    FetchGenError (exit 1)
    +-- UnsupportedPlatformError  (exit 1)
    +-- ChildSpawnError           (exit 1)
    +-- InstallError              (exit 1)
    +-- ConfigError               (exit 1)

A delegated binary that exits non-zero is not an error of the launcher; its
status is propagated as-is and never wrapped in an exception.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fetchgen.exit_codes import EXIT_GENERIC_FAILURE

if TYPE_CHECKING:
    from fetchgen.models import PlatformKey


class FetchGenError(Exception):
    """Base exception for all fetchgen errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UnsupportedPlatformError(FetchGenError):
    """Raised when no bundled binary exists for the computed platform key."""

    def __init__(self, key: PlatformKey, expected_path: str):
        super().__init__(f"No binary found for platform {key}")
        self.key = key
        self.expected_path = expected_path


class ChildSpawnError(FetchGenError):
    """Raised when the operating system refuses to start the delegated binary."""


class InstallError(FetchGenError):
    """Raised when the install-time placement step cannot copy the binary."""


class ConfigError(FetchGenError):
    """Raised for invalid ``FETCH_GEN_*`` environment configuration."""
