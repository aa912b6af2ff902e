"""
Configuration parameters for oshiv_installer.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from oshiv_installer.installer_exceptions import InstallerConfigurationError
from oshiv_installer.installer_settings import InstallerSettings

CONFIG_FILE_NAME = "installer.toml"

INSTALLER_TOML_SCHEMA = """
# Configuration for oshiv-installer

[installer]
# Directory the oshiv executable is copied into (default: ~/.local/bin)
bin_dir = "/usr/local/bin"

# Alternative release manifest (default: the manifest shipped with the package)
# manifest_path = "/path/to/release_manifest.json"

# Seconds to wait on the release server (default: 60)
# download_timeout = 60

# DEBUG, INFO, WARNING or ERROR (default: INFO)
# log_level = "INFO"
"""


def _config_error(message: str) -> InstallerConfigurationError:
    return InstallerConfigurationError(f"{message}\nExpected {CONFIG_FILE_NAME} format:\n{INSTALLER_TOML_SCHEMA}")


@dataclass
class InstallerConfig:
    """
    Configuration parameters
    """

    bin_dir: str = field(default_factory=InstallerSettings.get_default_bin_directory)
    manifest_path: Optional[str] = None
    download_timeout: float = 60
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not isinstance(self.bin_dir, (str, os.PathLike)) or not str(self.bin_dir):
            raise _config_error(f"'bin_dir' must be a path, got {self.bin_dir!r}")
        self.bin_dir = os.path.expanduser(str(self.bin_dir))

        if self.manifest_path is not None:
            if not isinstance(self.manifest_path, (str, os.PathLike)):
                raise _config_error(
                    f"'manifest_path' must be a path, got {self.manifest_path!r}"
                )
            self.manifest_path = os.path.expanduser(str(self.manifest_path))

        if isinstance(self.download_timeout, bool) or not isinstance(self.download_timeout, (int, float)):
            raise _config_error(
                f"'download_timeout' must be a number, got {self.download_timeout!r}"
            )
        if self.download_timeout <= 0:
            raise _config_error("'download_timeout' must be positive")

        if not isinstance(self.log_level, str) or not isinstance(
            logging.getLevelName(self.log_level.upper()), int
        ):
            raise _config_error(f"Unknown log level: {self.log_level!r}")
        self.log_level = self.log_level.upper()

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "InstallerConfig":
        """
        Create an InstallerConfig instance from a dictionary. Unknown keys are ignored.
        """
        names = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in env.items() if k in names and v is not None})

    @classmethod
    def from_toml(cls, path: str) -> "InstallerConfig":
        """
        Load the [installer] table of a TOML configuration file.

        Raises:
            InstallerConfigurationError: If the file cannot be read or is invalid
        """
        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except OSError as e:
            raise _config_error(f"Cannot read configuration file {path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise _config_error(f"Invalid TOML in {path}: {e}") from e

        section = toml_dict.get("installer", {})
        if not isinstance(section, dict):
            raise _config_error(f"[installer] in {path} must be a table")
        return cls.from_dict(section)

    @classmethod
    def discover(cls, workspace_root: Optional[str] = None) -> "InstallerConfig":
        """
        Load installer.toml from workspace_root (default: current directory) if it exists,
        otherwise return the defaults.
        """
        config_path = os.path.join(workspace_root or os.getcwd(), CONFIG_FILE_NAME)
        if not os.path.exists(config_path):
            return cls()
        return cls.from_toml(config_path)
