"""Shared test fixtures for fetchgen.

Provides a factory that lays out a fake package root with a stub
``fetch-gen`` binary under ``dist/<key>/``, output-state isolation, and a
Typer CLI runner. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Optional

import pytest

from fetchgen.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"
STUB_SOURCE = FIXTURES_DIR / "stub_fetch_gen.py"
OPENAPI_FIXTURE = FIXTURES_DIR / "openapi-test.yaml"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset the global OutputManager and launcher env vars around every test.

    The OutputManager caches a Console bound to sys.stderr at creation
    time, which goes stale once pytest swaps the capture streams.
    """
    for var in ["FETCH_GEN_PACKAGE_ROOT", "FETCH_GEN_VERBOSE", "FETCH_GEN_NO_COLOR", "STUB_EXIT_CODE"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    reset_output()
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Stub binary
# ---------------------------------------------------------------------------


def write_stub(path: Path) -> Path:
    """Write the stub script to *path* with a shebang for this interpreter."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!{sys.executable}\n" + STUB_SOURCE.read_text(encoding="utf-8"))
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def stub_binary(tmp_path: Path) -> Callable[..., Path]:
    """Factory placing the stub at ``<root>/dist/<key>/<name>``.

    Returns a callable ``make(key="linux-x64", name="fetch-gen", root=None)``
    that returns the package root it populated.
    """

    def _make(
        key: str = "linux-x64",
        name: str = "fetch-gen",
        root: Optional[Path] = None,
    ) -> Path:
        package_root = root or tmp_path / "pkg"
        write_stub(package_root / "dist" / key / name)
        return package_root

    return _make


@pytest.fixture
def openapi_fixture() -> Path:
    """Path to the sample OpenAPI document used by the smoke scenarios."""
    return OPENAPI_FIXTURE


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def src_dir() -> Path:
    """Directory that must be on PYTHONPATH for subprocesses to import fetchgen."""
    import fetchgen

    return Path(os.path.abspath(fetchgen.__file__)).parent.parent
