"""Platform resolution: host identifiers to platform keys and binary names.

The resolver is a plain table lookup. It never normalizes beyond the tables
below and never raises: an identifier outside the recognized set becomes an
empty segment in the :class:`~fetchgen.models.PlatformKey`, which fails the
launcher's existence check further down the line.

Host identifiers come from the Python runtime. ``sys.platform`` already uses
the ``win32``/``darwin``/``linux`` spelling. ``platform.machine()`` does not
(``x86_64``, ``AMD64``, ``aarch64``...), so :func:`host_arch` translates it
into the ``x64``/``arm64`` tags used by the ``dist/`` tree.
"""

from __future__ import annotations

import platform
import sys
from typing import Optional

from fetchgen.models import BINARY_BASENAME, PlatformKey

PLATFORM_MAP: dict[str, str] = {
    "win32": "win32",
    "darwin": "darwin",
    "linux": "linux",
}

ARCH_MAP: dict[str, str] = {
    "x64": "x64",
    "arm64": "arm64",
}

# platform.machine() spellings seen across CPython builds.
_MACHINE_ALIASES: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv8l": "arm64",
}

_WINDOWS_SUFFIX = ".exe"


def host_os() -> str:
    """Return the running interpreter's operating-system tag."""
    return sys.platform


def host_arch() -> str:
    """Return the running machine's architecture tag.

    Unknown machine names are returned lowercased so that
    :func:`resolve_platform_key` can reject them.
    """
    machine = platform.machine().lower()
    return _MACHINE_ALIASES.get(machine, machine)


def resolve_platform_key(os_tag: str, arch_tag: str) -> PlatformKey:
    """Map an (os, arch) pair to a :class:`~fetchgen.models.PlatformKey`.

    Args:
        os_tag: Operating-system tag, e.g. ``"linux"``.
        arch_tag: Architecture tag, e.g. ``"arm64"``.

    Returns:
        The key. Unrecognized tags become empty segments.
    """
    return PlatformKey(os=PLATFORM_MAP.get(os_tag, ""), arch=ARCH_MAP.get(arch_tag, ""))


def binary_name_for(os_tag: str) -> str:
    """Return the delegated binary's file name on *os_tag*."""
    if os_tag == "win32":
        return BINARY_BASENAME + _WINDOWS_SUFFIX
    return BINARY_BASENAME


def current_platform_key(
    os_tag: Optional[str] = None, arch_tag: Optional[str] = None
) -> PlatformKey:
    """Resolve the key for the running host, or for explicit tags when given."""
    return resolve_platform_key(
        os_tag if os_tag is not None else host_os(),
        arch_tag if arch_tag is not None else host_arch(),
    )
