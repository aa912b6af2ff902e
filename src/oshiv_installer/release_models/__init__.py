"""
Release models for the oshiv installer.

This package provides the platform key detected on the host and the Pydantic
data models for the release manifest that maps platforms to downloadable archives.
"""

from .platform_key import (
    CpuFamily,
    OperatingSystem,
    PlatformKey,
)
from .release_manifest import (
    ArtifactTarget,
    ReleaseArtifact,
    ReleaseManifest,
)
from .installed_binary import InstalledBinary

__all__ = [
    # Platforms
    "CpuFamily",
    "OperatingSystem",
    "PlatformKey",
    # Manifest
    "ArtifactTarget",
    "ReleaseArtifact",
    "ReleaseManifest",
    # Install result
    "InstalledBinary",
]
