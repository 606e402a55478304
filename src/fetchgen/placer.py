"""Install-time placement of the platform-matched binary.

Runs once after installation (``fetch-gen-postinstall``), outside the normal
invocation path. It copies ``dist/<key>/<binary>`` to ``<package-root>/fetch-gen``
and marks the copy executable, so a missing platform build surfaces at
install time instead of on first use.

The copy is staged in a temporary file next to the destination and then
renamed over it, so a failed copy never leaves a partial ``fetch-gen``
behind. Re-running simply overwrites the previous copy.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from fetchgen.exceptions import InstallError
from fetchgen.launcher import resolve_binary
from fetchgen.models import BINARY_BASENAME

EXECUTABLE_MODE = 0o755


def default_destination(package_root: Path) -> Path:
    """Return the fixed post-install location for *package_root*."""
    return Path(package_root) / BINARY_BASENAME


def place_binary(
    package_root: Path,
    os_tag: Optional[str] = None,
    arch_tag: Optional[str] = None,
    dest: Optional[Path] = None,
) -> Path:
    """Copy the binary for this host to *dest* and make it executable.

    Args:
        package_root: Directory containing the ``dist/`` tree.
        os_tag: Operating-system tag override (defaults to the host).
        arch_tag: Architecture tag override (defaults to the host).
        dest: Destination path; defaults to ``<package_root>/fetch-gen``.

    Returns:
        The destination path.

    Raises:
        InstallError: If the source binary is missing or the copy fails.
    """
    location = resolve_binary(package_root, os_tag, arch_tag)
    source = location.path
    target = Path(dest) if dest is not None else default_destination(package_root)

    if not location.exists():
        raise InstallError(
            f"Binary not found for platform: {location.key}\n"
            f"Expected binary at: {source}"
        )

    tmp_path: Optional[str] = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        os.close(fd)
        shutil.copyfile(source, tmp_path)
        os.chmod(tmp_path, EXECUTABLE_MODE)
        os.replace(tmp_path, target)
        tmp_path = None
    except OSError as exc:
        raise InstallError(f"Failed to install binary: {exc}") from exc
    finally:
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass

    return target
