"""
Tests for the oshiv-installer command line.
"""

import os

import pytest
from click.testing import CliRunner

from oshiv_installer.cli import cli
from oshiv_installer.installer_utils import FileUtils, PlatformUtils
from oshiv_installer.release_models import CpuFamily, OperatingSystem, PlatformKey
from tests.test_utils import BINARY_CONTENT, create_test_context, sha256_of

LINUX_ARM64 = PlatformKey(OperatingSystem.LINUX, CpuFamily.ARM, 64)
LINUX_ARM32 = PlatformKey(OperatingSystem.LINUX, CpuFamily.ARM, 32)


@pytest.fixture
def host_platform(monkeypatch):
    def set_platform(key):
        monkeypatch.setattr(PlatformUtils, "detect_platform", lambda: key)

    return set_platform


def write_config(path, **values):
    lines = ["[installer]"] + [f'{k} = "{v}"' for k, v in values.items()]
    path.write_text("\n".join(lines) + "\n")
    return str(path)


def test_version():
    result = CliRunner().invoke(cli, ["version"])
    assert result.exit_code == 0
    assert result.output == "oshiv version: 1.4.0\n"


def test_targets():
    result = CliRunner().invoke(cli, ["targets"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "darwin_all\tmacos/any/any",
        "linux_amd64\tlinux/intel/64",
        "linux_arm64\tlinux/arm/64",
    ]


def test_resolve(host_platform):
    host_platform(LINUX_ARM64)

    result = CliRunner().invoke(cli, ["resolve"])

    assert result.exit_code == 0
    assert "platform: linux/arm/64" in result.output
    assert "target: linux_arm64" in result.output
    assert "oshiv_1.4.0_linux_arm64.tar.gz" in result.output
    assert "5bbdbbf005173a798e5bb1779a910e171889b56f908e446a08db49800e96c40d" in result.output


def test_resolve_unsupported(host_platform):
    host_platform(LINUX_ARM32)

    result = CliRunner().invoke(cli, ["resolve"])

    assert result.exit_code == 1
    assert "No release artifact for platform linux/arm/32" in result.output


def test_install(host_platform, monkeypatch):
    host_platform(LINUX_ARM64)
    with create_test_context() as context:
        monkeypatch.setattr(FileUtils, "download_file", context.fetcher)
        config_path = write_config(
            context.root / "installer.toml", manifest_path=context.manifest_path
        )

        result = CliRunner().invoke(
            cli, ["install", "--config", config_path, "--bin-dir", str(context.bin_dir)]
        )

        assert result.exit_code == 0, result.output
        target = context.bin_dir / "oshiv"
        assert str(target) in result.output
        assert target.read_bytes() == BINARY_CONTENT
        assert os.access(target, os.X_OK)


def test_install_checksum_mismatch(host_platform, monkeypatch):
    host_platform(LINUX_ARM64)
    with create_test_context(checksums={"linux_arm64": sha256_of(b"tampered")}) as context:
        monkeypatch.setattr(FileUtils, "download_file", context.fetcher)
        config_path = write_config(
            context.root / "installer.toml",
            manifest_path=context.manifest_path,
            bin_dir=context.bin_dir,
        )

        result = CliRunner().invoke(cli, ["install", "--config", config_path])

        assert result.exit_code == 1
        assert "Checksum mismatch" in result.output
        assert not (context.bin_dir / "oshiv").exists()



def test_install_unsupported_platform(host_platform, monkeypatch):
    host_platform(PlatformKey(OperatingSystem.LINUX, CpuFamily.INTEL, 32))
    with create_test_context() as context:
        monkeypatch.setattr(FileUtils, "download_file", context.fetcher)
        config_path = write_config(
            context.root / "installer.toml",
            manifest_path=context.manifest_path,
            bin_dir=context.bin_dir,
        )

        result = CliRunner().invoke(cli, ["install", "--config", config_path])

        assert result.exit_code == 1
        assert "No release artifact for platform linux/intel/32" in result.output
        assert context.fetcher.calls == []
        assert not context.bin_dir.exists()

def test_invalid_manifest_is_config_error(tmp_path):
    manifest = tmp_path / "manifest.json"
    manifest.write_text("{}")
    config_path = write_config(tmp_path / "installer.toml", manifest_path=manifest)

    result = CliRunner().invoke(cli, ["version", "--config", config_path])

    assert result.exit_code == 2
    assert "Invalid release manifest" in result.output


def test_installer_toml_discovered_in_working_directory():
    runner = CliRunner()
    with runner.isolated_filesystem():
        with open("installer.toml", "w") as f:
            f.write('[installer]\nmanifest_path = "missing.json"\n')

        result = runner.invoke(cli, ["targets"])

    assert result.exit_code == 2
    assert "Cannot read release manifest" in result.output
