"""
This file contains various utility functions like I/O operations, handling paths, etc.
"""

import hashlib
import logging
import os
import pathlib
import platform
import shutil
import struct
import tarfile
from typing import Optional

import requests

from oshiv_installer.installer_exceptions import DownloadFailure, ExtractionFailure
from oshiv_installer.installer_logger import InstallerLogger
from oshiv_installer.release_models import CpuFamily, OperatingSystem, PlatformKey

_SYSTEM_NAMES = {
    "darwin": OperatingSystem.MACOS,
    "linux": OperatingSystem.LINUX,
    "windows": OperatingSystem.WINDOWS,
}

# machine name -> (cpu family, bits or None when the name does not say)
_MACHINE_NAMES = {
    "x86_64": (CpuFamily.INTEL, 64),
    "amd64": (CpuFamily.INTEL, 64),
    "i386": (CpuFamily.INTEL, 32),
    "i686": (CpuFamily.INTEL, 32),
    "x86": (CpuFamily.INTEL, 32),
    "arm64": (CpuFamily.ARM, 64),
    "aarch64": (CpuFamily.ARM, 64),
    "armv7l": (CpuFamily.ARM, 32),
    "armv6l": (CpuFamily.ARM, 32),
    "arm": (CpuFamily.ARM, None),
}

HASH_CHUNK_SIZE = 1024 * 64


class PlatformUtils:
    """
    This class provides utilities for platform detection and identification.
    """

    @staticmethod
    def detect_platform(
        system: Optional[str] = None,
        machine: Optional[str] = None,
        pointer_bits: Optional[int] = None,
    ) -> PlatformKey:
        """
        Returns the PlatformKey of the running host. The arguments override what is read
        from the host and exist so the mapping can be exercised without the matching hardware.
        """
        system = (system if system is not None else platform.system()).lower()
        machine = (machine if machine is not None else platform.machine()).lower()
        if pointer_bits is None:
            pointer_bits = struct.calcsize("P") * 8

        os_name = _SYSTEM_NAMES.get(system, OperatingSystem.OTHER)
        cpu_family, bits = _MACHINE_NAMES.get(machine, (CpuFamily.OTHER, None))
        if bits is None:
            bits = 64 if pointer_bits >= 64 else 32

        return PlatformKey(os_name, cpu_family, bits)


class FileUtils:
    """
    Utility functions for file operations.
    """

    @staticmethod
    def download_file(logger: InstallerLogger, url: str, target_path: str, timeout: float = 60) -> None:
        """
        Downloads the file from the given URL to the given {target_path}
        """
        os.makedirs(os.path.dirname(target_path), exist_ok=True)
        try:
            with requests.get(url, stream=True, timeout=timeout) as response:
                if response.status_code != 200:
                    logger.log(
                        f"Error downloading file '{url}': HTTP {response.status_code}",
                        logging.ERROR,
                    )
                    raise DownloadFailure(
                        f"Error downloading {url}: HTTP {response.status_code}"
                    )
                with open(target_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=HASH_CHUNK_SIZE):
                        f.write(chunk)
        except requests.RequestException as exc:
            logger.log(f"Error downloading file '{url}': {exc}", logging.ERROR)
            raise DownloadFailure(f"Error downloading {url}: {exc}") from exc
        except OSError as exc:
            logger.log(f"Error writing download of '{url}' to {target_path}: {exc}", logging.ERROR)
            raise DownloadFailure(f"Error saving {url} to {target_path}: {exc}") from exc

    @staticmethod
    def compute_sha256(file_path: str) -> str:
        """
        Compute the SHA-256 digest of a file, read in chunks.
        """
        sha256_hash = hashlib.sha256()
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
                sha256_hash.update(chunk)
        return sha256_hash.hexdigest()

    @staticmethod
    def extract_tar_gz(logger: InstallerLogger, archive_path: str, target_dir: str) -> None:
        """
        Extracts a tar+gzip archive into {target_dir}. Members that would land outside
        the target directory, links and special files are refused.
        """
        os.makedirs(target_dir, exist_ok=True)
        try:
            with tarfile.open(archive_path, "r:gz") as tar:
                members = tar.getmembers()
                for member in members:
                    FileUtils._check_member(member)
                if hasattr(tarfile, "data_filter"):
                    tar.extractall(target_dir, members=members, filter="data")
                else:
                    tar.extractall(target_dir, members=members)
        except (tarfile.TarError, EOFError, OSError) as exc:
            logger.log(f"Error extracting archive '{archive_path}': {exc}", logging.ERROR)
            raise ExtractionFailure(f"Cannot extract {archive_path}: {exc}") from exc

    @staticmethod
    def _check_member(member: tarfile.TarInfo) -> None:
        path = pathlib.PurePosixPath(member.name)
        if path.is_absolute() or ".." in path.parts:
            raise ExtractionFailure(f"Archive member escapes extraction directory: {member.name}")
        if not (member.isfile() or member.isdir()):
            raise ExtractionFailure(f"Archive member is not a regular file: {member.name}")

    @staticmethod
    def find_file(root_dir: str, file_name: str) -> str:
        """
        Returns the single regular file named {file_name} below {root_dir}.
        """
        matches = [
            str(p)
            for p in sorted(pathlib.Path(root_dir).rglob("*"))
            if p.name == file_name and p.is_file()
        ]
        if not matches:
            raise ExtractionFailure(f"Archive does not contain '{file_name}'")
        if len(matches) > 1:
            raise ExtractionFailure(
                f"Archive contains more than one '{file_name}': {', '.join(matches)}"
            )
        return matches[0]

    @staticmethod
    def copy_executable(source_path: str, target_path: str) -> None:
        """
        Copies {source_path} to {target_path} with mode 0o755. The target is replaced
        atomically so an existing file is overwritten in place.
        """
        target_dir = os.path.dirname(target_path)
        os.makedirs(target_dir, exist_ok=True)
        staging_path = os.path.join(target_dir, f".{os.path.basename(target_path)}.partial")
        try:
            shutil.copyfile(source_path, staging_path)
            os.chmod(staging_path, 0o755)
            os.replace(staging_path, target_path)
        finally:
            if os.path.exists(staging_path):
                os.remove(staging_path)
