"""Self-location for the two entry conventions.

The launcher finds the ``dist/<os>-<arch>/`` tree relative to wherever the
``fetchgen`` package was installed, independent of the caller's working
directory. The two ways of starting the launcher locate the package
differently, and each entry module picks its strategy statically:

* **Console script** (``fetch-gen``, :mod:`fetchgen.cli`) goes through the
  import system: :func:`locate_from_resources` asks
  :func:`importlib.resources.files` for the package directory.
* **Module execution** (``python -m fetchgen``, :mod:`fetchgen.__main__`)
  uses the module file itself: :func:`locate_from_file`.

Both fall back to the current working directory only when their mechanism is
entirely unavailable. That fallback never invents a plausible location: if
the binary is not in ``./dist/<key>/`` the launcher reports it as missing.
"""

from __future__ import annotations

import importlib.resources
import os
from pathlib import Path
from typing import Optional

from fetchgen.models import LauncherSettings
from fetchgen.output import debug

PACKAGE_NAME = "fetchgen"


def locate_from_file(module_file: Optional[str]) -> Path:
    """Return the directory containing *module_file*.

    Args:
        module_file: The calling module's ``__file__``. Frozen or namespace
            modules may not have one.

    Returns:
        The package directory, or the current working directory when
        *module_file* is unavailable.
    """
    if not module_file:
        debug("Module file unavailable; falling back to working directory")
        return Path.cwd()
    return Path(os.path.abspath(module_file)).parent


def locate_from_resources(package: str = PACKAGE_NAME) -> Path:
    """Return the on-disk directory of *package* via :mod:`importlib.resources`.

    Falls back to the current working directory when the package cannot be
    imported or its resources are not backed by a real directory (for
    example when loaded from a zip archive).
    """
    try:
        traversable = importlib.resources.files(package)
    except ModuleNotFoundError:
        debug(f"Package {package!r} not importable; falling back to working directory")
        return Path.cwd()

    if not isinstance(traversable, Path) or not traversable.is_dir():
        debug(f"Resources for {package!r} are not on the filesystem; falling back to working directory")
        return Path.cwd()
    return traversable.resolve()


def resolve_package_root(located: Path, settings: LauncherSettings) -> Path:
    """Apply the ``FETCH_GEN_PACKAGE_ROOT`` override on top of *located*.

    Args:
        located: Directory found by the entry convention's locator.
        settings: Launcher settings loaded from the environment.

    Returns:
        The package root the launcher should resolve binaries against.
    """
    if settings.package_root is not None:
        debug(f"Using package root from FETCH_GEN_PACKAGE_ROOT: {settings.package_root}")
        return settings.package_root
    return located
