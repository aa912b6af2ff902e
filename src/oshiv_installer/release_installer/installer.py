"""
Artifact installer implementation.

Downloads, verifies, extracts and installs the release artifact for one platform.
"""

import hmac
import logging
import os
import tempfile
from typing import Callable, Optional

from oshiv_installer.installer_config import InstallerConfig
from oshiv_installer.installer_exceptions import (
    ChecksumMismatch,
    DownloadFailure,
    InstallError,
    InstallWriteFailure,
)
from oshiv_installer.installer_logger import InstallerLogger
from oshiv_installer.installer_utils import FileUtils
from oshiv_installer.release_config.resolver import (
    ArtifactResolver,
    InstallPlan,
    InstallStatus,
)
from oshiv_installer.release_models import InstalledBinary, PlatformKey

# (logger, url, target_path, timeout) -> None
Fetcher = Callable[[InstallerLogger, str, str, float], None]


class ArtifactInstaller:
    """
    Installs the executable of the release artifact resolved for a platform.

    One call to install() is one linear run: resolve, download, verify, extract, copy.
    Every failure is terminal for that run and propagates as an InstallError.
    """

    def __init__(
        self,
        resolver: ArtifactResolver,
        config: InstallerConfig,
        logger: InstallerLogger,
        fetch: Optional[Fetcher] = None,
    ):
        """
        Initialize the artifact installer.

        Args:
            resolver: The ArtifactResolver over a validated manifest
            config: Installer configuration (bin directory, timeout)
            logger: Logger for progress and error messages
            fetch: Downloads a URL to a path. Defaults to FileUtils.download_file
        """
        self.resolver = resolver
        self.config = config
        self.logger = logger
        self.fetch = fetch or FileUtils.download_file
        self.last_plan: Optional[InstallPlan] = None

    def install(self, platform: PlatformKey) -> InstalledBinary:
        """
        Install the executable for {platform} into the configured bin directory.

        Returns:
            The InstalledBinary describing the placed executable

        Raises:
            UnsupportedPlatform: No artifact for the platform
            DownloadFailure: The archive could not be fetched
            ChecksumMismatch: The archive digest differs from the manifest
            ExtractionFailure: The archive is corrupt or lacks the executable
            InstallWriteFailure: The executable could not be written
        """
        plan = self.resolver.create_install_plan(platform, self.config.bin_dir)
        self.last_plan = plan
        self.logger.log(
            f"Resolved {platform.describe()} to {plan.target_id} ({plan.url})",
            logging.INFO,
        )

        plan.status = InstallStatus.IN_PROGRESS
        try:
            with tempfile.TemporaryDirectory(prefix="oshiv-installer-") as work_dir:
                digest = self._download_and_verify(plan, work_dir)
                binary_path = self._extract(plan, work_dir)
                self._place(plan, binary_path)
        except InstallError as e:
            plan.mark_failed(e.message)
            self.logger.log(f"Install of {plan.target_id} failed: {e.message}", logging.ERROR)
            raise

        plan.status = InstallStatus.COMPLETED
        self.logger.log(
            f"Installed {plan.artifact.binary_name} to {plan.destination_path}",
            logging.INFO,
        )
        return InstalledBinary(
            path=plan.destination_path,
            target_id=plan.target_id,
            artifact=plan.artifact,
            platform=platform,
            sha256=digest,
        )

    @staticmethod
    def _archive_path(plan: InstallPlan, work_dir: str) -> str:
        return os.path.join(work_dir, os.path.basename(plan.url) or "artifact.tar.gz")

    def _download_and_verify(self, plan: InstallPlan, work_dir: str) -> str:
        archive_path = self._archive_path(plan, work_dir)
        self.logger.log(f"Downloading {plan.url}", logging.INFO)
        self.fetch(self.logger, plan.url, archive_path, self.config.download_timeout)
        if not os.path.isfile(archive_path):
            raise DownloadFailure(f"Download of {plan.url} produced no file")

        actual = FileUtils.compute_sha256(archive_path)
        expected = plan.artifact.sha256
        if not hmac.compare_digest(actual.lower(), expected.lower()):
            raise ChecksumMismatch(plan.url, expected, actual)

        self.logger.log(f"Checksum verified for {plan.target_id}: {actual}", logging.DEBUG)
        return actual

    def _extract(self, plan: InstallPlan, work_dir: str) -> str:
        extract_dir = os.path.join(work_dir, "extracted")
        archive_path = self._archive_path(plan, work_dir)
        FileUtils.extract_tar_gz(self.logger, archive_path, extract_dir)
        return FileUtils.find_file(extract_dir, plan.artifact.binary_name)

    def _place(self, plan: InstallPlan, binary_path: str) -> None:
        try:
            FileUtils.copy_executable(binary_path, plan.destination_path)
        except OSError as e:
            raise InstallWriteFailure(
                f"Cannot write {plan.destination_path}: {e}"
            ) from e
