"""Tests for fetchgen.platforms -- platform keys and binary names."""

from __future__ import annotations

import pytest

from fetchgen import platforms
from fetchgen.platforms import (
    binary_name_for,
    current_platform_key,
    host_arch,
    resolve_platform_key,
)


class TestResolvePlatformKey:
    @pytest.mark.parametrize("os_tag", ["win32", "darwin", "linux"])
    @pytest.mark.parametrize("arch_tag", ["x64", "arm64"])
    def test_recognized_pairs(self, os_tag: str, arch_tag: str) -> None:
        key = resolve_platform_key(os_tag, arch_tag)
        assert str(key) == f"{os_tag}-{arch_tag}"
        assert key.is_supported

    def test_unknown_os_becomes_empty_segment(self) -> None:
        key = resolve_platform_key("freebsd13", "x64")
        assert str(key) == "-x64"
        assert not key.is_supported

    def test_unknown_arch_becomes_empty_segment(self) -> None:
        key = resolve_platform_key("linux", "ppc64le")
        assert str(key) == "linux-"
        assert not key.is_supported

    def test_no_normalization_beyond_lookup(self) -> None:
        # Raw machine names are the host collaborator's job, not the resolver's.
        assert str(resolve_platform_key("Linux", "x86_64")) == "-"


class TestBinaryName:
    def test_windows_gets_exe_suffix(self) -> None:
        assert binary_name_for("win32") == "fetch-gen.exe"

    @pytest.mark.parametrize("os_tag", ["darwin", "linux", "sunos5", ""])
    def test_other_platforms_plain_name(self, os_tag: str) -> None:
        assert binary_name_for(os_tag) == "fetch-gen"


class TestHostTags:
    @pytest.mark.parametrize(
        ("machine", "expected"),
        [
            ("x86_64", "x64"),
            ("AMD64", "x64"),
            ("aarch64", "arm64"),
            ("arm64", "arm64"),
            ("riscv64", "riscv64"),
        ],
    )
    def test_host_arch_translates_machine_names(
        self, machine: str, expected: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(platforms.platform, "machine", lambda: machine)
        assert host_arch() == expected

    def test_host_os_is_sys_platform(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(platforms.sys, "platform", "darwin")
        assert platforms.host_os() == "darwin"

    def test_current_key_uses_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(platforms, "host_os", lambda: "linux")
        monkeypatch.setattr(platforms, "host_arch", lambda: "arm64")
        assert str(current_platform_key()) == "linux-arm64"

    def test_current_key_explicit_tags_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(platforms, "host_os", lambda: "linux")
        monkeypatch.setattr(platforms, "host_arch", lambda: "arm64")
        assert str(current_platform_key("win32", "x64")) == "win32-x64"
