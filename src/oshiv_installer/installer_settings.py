"""
Defines the default locations used by oshiv_installer
"""

import pathlib


class InstallerSettings:
    """
    Provides the various default paths used by the installer
    """

    @staticmethod
    def get_default_bin_directory() -> str:
        """
        Returns the directory the executable is installed into when none is configured
        """
        return str(pathlib.Path.home() / ".local" / "bin")

    @staticmethod
    def get_packaged_manifest_path() -> str:
        """
        Returns the path of the release manifest shipped with the package
        """
        return str(
            pathlib.Path(__file__).parent / "release_config" / "release_manifest.json"
        )
