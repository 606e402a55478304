"""Environment-driven configuration for the launcher.

The launcher defines no command-line flags of its own (every argument belongs
to the delegated binary), so its few knobs come from the environment:

* ``FETCH_GEN_PACKAGE_ROOT`` -- explicit package root. Takes precedence over
  self-location; see :func:`fetchgen.locator.resolve_package_root`.
* ``FETCH_GEN_VERBOSE`` -- truthy value enables debug diagnostics on stderr.
* ``FETCH_GEN_NO_COLOR`` -- truthy value disables colour. ``NO_COLOR`` and
  ``TERM=dumb`` are honoured separately by :mod:`fetchgen.output`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from fetchgen.exceptions import ConfigError
from fetchgen.models import LauncherSettings

_ENV_PREFIX = "FETCH_GEN_"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"", "0", "false", "no", "off"})


def _parse_flag(name: str, value: Optional[str]) -> bool:
    """Interpret an environment flag, rejecting anything ambiguous."""
    if value is None:
        return False
    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ConfigError(
        f"Invalid value for {name}: {value!r} (expected one of 1/0, true/false, yes/no, on/off)"
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> LauncherSettings:
    """Build :class:`~fetchgen.models.LauncherSettings` from the environment.

    Args:
        environ: Mapping to read instead of :data:`os.environ`.

    Returns:
        The validated settings.

    Raises:
        ConfigError: If a flag has an unrecognized value.
    """
    env = os.environ if environ is None else environ

    root_value = env.get(f"{_ENV_PREFIX}PACKAGE_ROOT", "")
    package_root = Path(root_value).expanduser() if root_value else None

    try:
        return LauncherSettings(
            package_root=package_root,
            verbose=_parse_flag(f"{_ENV_PREFIX}VERBOSE", env.get(f"{_ENV_PREFIX}VERBOSE")),
            no_color=_parse_flag(f"{_ENV_PREFIX}NO_COLOR", env.get(f"{_ENV_PREFIX}NO_COLOR")),
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid launcher configuration: {exc}") from exc
