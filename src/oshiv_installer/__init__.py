"""
oshiv_installer resolves, verifies and installs the prebuilt oshiv release for the running host.
"""

from typing import Optional

from oshiv_installer.installer_config import InstallerConfig
from oshiv_installer.installer_exceptions import (
    ChecksumMismatch,
    DownloadFailure,
    ExtractionFailure,
    InstallError,
    InstallerConfigurationError,
    InstallerException,
    InstallWriteFailure,
    UnsupportedPlatform,
)
from oshiv_installer.installer_logger import InstallerLogger
from oshiv_installer.installer_utils import PlatformUtils
from oshiv_installer.release_config import ArtifactResolver
from oshiv_installer.release_installer import ArtifactInstaller
from oshiv_installer.release_models import InstalledBinary, PlatformKey

detect_platform = PlatformUtils.detect_platform


def install(
    platform: PlatformKey,
    config: Optional[InstallerConfig] = None,
    logger: Optional[InstallerLogger] = None,
) -> InstalledBinary:
    """
    Install the oshiv executable published for {platform}. The platform is supplied by the
    caller, usually from detect_platform().
    """
    config = config or InstallerConfig()
    logger = logger or InstallerLogger(config.log_level_value)
    resolver = ArtifactResolver.from_path(config.manifest_path)
    return ArtifactInstaller(resolver, config, logger).install(platform)


__all__ = [
    "ArtifactInstaller",
    "ArtifactResolver",
    "ChecksumMismatch",
    "DownloadFailure",
    "ExtractionFailure",
    "InstallError",
    "InstallWriteFailure",
    "InstalledBinary",
    "InstallerConfig",
    "InstallerConfigurationError",
    "InstallerException",
    "InstallerLogger",
    "PlatformKey",
    "UnsupportedPlatform",
    "detect_platform",
    "install",
]
