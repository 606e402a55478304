"""Numeric process exit codes used by the launcher itself.

The launcher normally exits with whatever status the delegated binary
produced. These constants cover the few cases where the launcher has to pick
a status on its own.
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""No binary for this platform, or the child produced no usable status."""

EXIT_CANCELLED = 130
"""Interrupted by Ctrl-C outside of a running child process."""
