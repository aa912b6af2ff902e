"""
Release artifact resolution.

Loads the release manifest and maps a PlatformKey to the single artifact
published for it, then records where it should be installed.
"""

import json
import pathlib
from typing import Dict, List, Optional

from pydantic import ValidationError

from oshiv_installer.installer_exceptions import (
    InstallerConfigurationError,
    UnsupportedPlatform,
)
from oshiv_installer.installer_settings import InstallerSettings
from oshiv_installer.release_models import PlatformKey, ReleaseArtifact, ReleaseManifest


def load_release_manifest(path: Optional[str] = None) -> ReleaseManifest:
    """
    Load and validate a release manifest.

    Args:
        path: Manifest JSON file. Defaults to the manifest shipped with the package.

    Raises:
        InstallerConfigurationError: If the file is missing, not JSON, or fails validation
    """
    path = path or InstallerSettings.get_packaged_manifest_path()
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as e:
        raise InstallerConfigurationError(f"Cannot read release manifest {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InstallerConfigurationError(f"Release manifest {path} is not valid JSON: {e}") from e

    try:
        return ReleaseManifest.from_dict(data)
    except ValidationError as e:
        raise InstallerConfigurationError(f"Invalid release manifest {path}: {e}") from e


class InstallStatus:
    """Enumeration of install statuses."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class InstallPlan:
    """
    A plan to install the artifact resolved for one platform.
    """

    def __init__(
            self,
            target_id: str,
            artifact: ReleaseArtifact,
            platform: PlatformKey,
            destination_path: str,
            status: str = InstallStatus.PENDING,
    ):
        """
        Initialize an install plan.

        Args:
            target_id: Manifest key of the artifact (e.g. "linux_amd64")
            artifact: The ReleaseArtifact to download
            platform: The platform the artifact was resolved for
            destination_path: Final path of the executable
            status: Current install status
        """
        self.target_id = target_id
        self.artifact = artifact
        self.platform = platform
        self.destination_path = destination_path
        self.status = status
        self.error_message: Optional[str] = None

    @property
    def url(self) -> str:
        return self.artifact.url

    def mark_failed(self, error_message: str) -> None:
        self.status = InstallStatus.FAILED
        self.error_message = error_message

    def __repr__(self) -> str:
        return (
            f"InstallPlan(target={self.target_id}, "
            f"status={self.status}, url={self.url})"
        )


class ArtifactResolver:
    """
    Pure lookup from PlatformKey to ReleaseArtifact over a validated manifest.
    """

    def __init__(self, manifest: ReleaseManifest):
        self.manifest = manifest

    @classmethod
    def from_path(cls, path: Optional[str] = None) -> "ArtifactResolver":
        return cls(load_release_manifest(path))

    def supported_targets(self) -> List[str]:
        return list(self.manifest.artifacts.keys())

    def resolve_target(self, platform: PlatformKey) -> str:
        """
        Returns the manifest key of the artifact for {platform}.

        Raises:
            UnsupportedPlatform: If no artifact is published for the platform
        """
        matching = self.manifest.targets_for(platform)
        if not matching:
            raise UnsupportedPlatform(platform.describe(), self.supported_targets())
        # manifest validation guarantees at most one match
        return matching[0]

    def resolve(self, platform: PlatformKey) -> ReleaseArtifact:
        return self.manifest.artifacts[self.resolve_target(platform)]

    def create_install_plan(self, platform: PlatformKey, bin_dir: str) -> InstallPlan:
        target_id = self.resolve_target(platform)
        artifact = self.manifest.artifacts[target_id]
        return InstallPlan(
            target_id=target_id,
            artifact=artifact,
            platform=platform,
            destination_path=str(pathlib.Path(bin_dir) / artifact.binary_name),
        )

    def describe_targets(self) -> Dict[str, str]:
        """
        Returns a human-readable platform selector for every target.
        """
        return {
            target_id: artifact.target.describe()
            for target_id, artifact in self.manifest.artifacts.items()
        }
