"""Pydantic models shared across fetchgen modules.

Everything here is transient: computed once per launcher invocation, never
persisted and never cached across invocations.

* :class:`PlatformKey` -- ``{os}-{arch}`` identifier selecting a binary
  directory under ``dist/``.
* :class:`BinaryLocation` -- where the delegated binary is expected on disk.
* :class:`ChildProcessResult` -- what the spawned process reported back.
* :class:`LauncherSettings` -- environment-driven configuration, built by
  :func:`fetchgen.config.load_settings`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fetchgen.exit_codes import EXIT_GENERIC_FAILURE

SUPPORTED_OS_TAGS = ("win32", "darwin", "linux")
SUPPORTED_ARCH_TAGS = ("x64", "arm64")

DIST_DIRNAME = "dist"
BINARY_BASENAME = "fetch-gen"


class PlatformKey(BaseModel):
    """Composite operating-system/architecture identifier.

    An unrecognized tag on either axis is stored as an empty segment rather
    than rejected, so ``str(key)`` may read ``"-x64"`` or ``"linux-"``. Such
    a key never matches a directory under ``dist/`` and the launcher reports
    the binary as missing.

    Example::

        >>> str(PlatformKey(os="darwin", arch="arm64"))
        'darwin-arm64'
    """

    model_config = ConfigDict(frozen=True)

    os: str = Field(default="", description="Operating-system tag: win32, darwin, linux")
    arch: str = Field(default="", description="Architecture tag: x64, arm64")

    @property
    def is_supported(self) -> bool:
        """Whether both segments are recognized tags."""
        return self.os in SUPPORTED_OS_TAGS and self.arch in SUPPORTED_ARCH_TAGS

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}"


class BinaryLocation(BaseModel):
    """Expected on-disk location of the delegated binary.

    The path layout is ``{package_root}/dist/{key}/{binary_name}`` and must
    match the directory tree shipped in the wheel exactly.
    """

    model_config = ConfigDict(frozen=True)

    package_root: Path
    key: PlatformKey
    binary_name: str = BINARY_BASENAME

    @property
    def directory(self) -> Path:
        return self.package_root / DIST_DIRNAME / str(self.key)

    @property
    def path(self) -> Path:
        return self.directory / self.binary_name

    def exists(self) -> bool:
        """Return ``True`` if a regular file is present at :attr:`path`."""
        return self.path.is_file()


class ChildProcessResult(BaseModel):
    """Exit information observed from the delegated binary.

    ``returncode`` follows :class:`subprocess.Popen` conventions: ``None``
    when the process never started, a negative number ``-N`` when it was
    killed by signal ``N``.
    """

    model_config = ConfigDict(frozen=True)

    returncode: Optional[int] = None

    @property
    def signal(self) -> Optional[int]:
        """Number of the signal that terminated the child, if any."""
        if self.returncode is not None and self.returncode < 0:
            return -self.returncode
        return None

    @property
    def exit_status(self) -> int:
        """Status the launcher should exit with.

        The child's own status when it exited normally, otherwise
        :data:`~fetchgen.exit_codes.EXIT_GENERIC_FAILURE`.
        """
        if self.returncode is None or self.returncode < 0:
            return EXIT_GENERIC_FAILURE
        return self.returncode


class LauncherSettings(BaseModel):
    """Runtime configuration read from ``FETCH_GEN_*`` environment variables."""

    package_root: Optional[Path] = Field(
        default=None,
        description="Explicit package root; overrides self-location when set",
    )
    verbose: bool = Field(
        default=False, description="Print debug diagnostics to stderr"
    )
    no_color: bool = Field(default=False, description="Disable colour output")
