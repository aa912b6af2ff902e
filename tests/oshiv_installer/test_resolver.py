"""
Tests for artifact resolution over the release manifest.
"""

import json
import pathlib

import pytest

from oshiv_installer.installer_exceptions import (
    InstallerConfigurationError,
    UnsupportedPlatform,
)
from oshiv_installer.release_config import (
    ArtifactResolver,
    InstallStatus,
    load_release_manifest,
)
from oshiv_installer.release_models import CpuFamily, OperatingSystem, PlatformKey
from tests.test_utils import manifest_dict, sha256_of

MACOS, LINUX, WINDOWS = OperatingSystem.MACOS, OperatingSystem.LINUX, OperatingSystem.WINDOWS
INTEL, ARM = CpuFamily.INTEL, CpuFamily.ARM


@pytest.fixture
def resolver():
    return ArtifactResolver(load_release_manifest())


@pytest.mark.parametrize(
    "platform, target_id",
    [
        (PlatformKey(MACOS, INTEL, 64), "darwin_all"),
        (PlatformKey(MACOS, ARM, 64), "darwin_all"),
        (PlatformKey(LINUX, INTEL, 64), "linux_amd64"),
        (PlatformKey(LINUX, ARM, 64), "linux_arm64"),
    ],
)
def test_resolve_supported_platforms(resolver, platform, target_id):
    artifact = resolver.resolve(platform)
    assert resolver.resolve_target(platform) == target_id
    assert artifact.url.endswith(f"oshiv_1.4.0_{target_id}.tar.gz")


@pytest.mark.parametrize(
    "platform",
    [
        PlatformKey(LINUX, INTEL, 32),
        PlatformKey(LINUX, ARM, 32),
        PlatformKey(LINUX, CpuFamily.OTHER, 64),
        PlatformKey(WINDOWS, INTEL, 64),
        PlatformKey(OperatingSystem.OTHER, ARM, 64),
    ],
)
def test_resolve_unsupported_platforms(resolver, platform):
    with pytest.raises(UnsupportedPlatform) as exc_info:
        resolver.resolve(platform)

    assert exc_info.value.platform == platform.describe()
    assert exc_info.value.supported_targets == ["darwin_all", "linux_amd64", "linux_arm64"]


@pytest.mark.parametrize(
    "platform, target_id",
    [
        (PlatformKey("macos", "arm", 64), "darwin_all"),
        (PlatformKey("linux", "intel", 64), "linux_amd64"),
    ],
)
def test_resolve_platform_given_as_strings(resolver, platform, target_id):
    assert resolver.resolve_target(platform) == target_id


def test_linux_32_bit_given_as_strings_is_unsupported(resolver):
    with pytest.raises(UnsupportedPlatform) as exc_info:
        resolver.resolve(PlatformKey("linux", "intel", 32))

    assert exc_info.value.platform == "linux/intel/32"


def test_create_install_plan(resolver, tmp_path):
    plan = resolver.create_install_plan(PlatformKey(LINUX, ARM, 64), str(tmp_path))

    assert plan.target_id == "linux_arm64"
    assert plan.destination_path == str(tmp_path / "oshiv")
    assert plan.status == InstallStatus.PENDING
    assert plan.error_message is None
    assert "linux_arm64" in repr(plan)


def test_create_install_plan_unsupported(resolver, tmp_path):
    with pytest.raises(UnsupportedPlatform):
        resolver.create_install_plan(PlatformKey(LINUX, INTEL, 32), str(tmp_path))


def test_describe_targets(resolver):
    assert resolver.describe_targets() == {
        "darwin_all": "macos/any/any",
        "linux_amd64": "linux/intel/64",
        "linux_arm64": "linux/arm/64",
    }


class TestLoadReleaseManifest:
    def test_missing_file(self, tmp_path):
        with pytest.raises(InstallerConfigurationError, match="Cannot read"):
            load_release_manifest(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text("{not json")
        with pytest.raises(InstallerConfigurationError, match="not valid JSON"):
            load_release_manifest(str(path))

    def test_65_character_checksum_is_a_configuration_error(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text(json.dumps(manifest_dict({"linux_amd64": sha256_of(b"x") + "a"})))

        with pytest.raises(InstallerConfigurationError, match="got 65"):
            ArtifactResolver.from_path(str(path))

    def test_custom_manifest(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text(json.dumps(manifest_dict({"linux_arm64": sha256_of(b"x")})))

        resolver = ArtifactResolver.from_path(str(path))
        assert resolver.supported_targets() == ["linux_arm64"]
        with pytest.raises(UnsupportedPlatform):
            resolver.resolve(PlatformKey(MACOS, ARM, 64))

    def test_packaged_manifest_is_default(self):
        manifest = load_release_manifest()
        assert pathlib.Path(manifest.artifacts["linux_amd64"].url).name == (
            "oshiv_1.4.0_linux_amd64.tar.gz"
        )
