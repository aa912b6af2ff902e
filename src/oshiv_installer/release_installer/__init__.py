"""
Release artifact installer.

This package handles:
1. Downloading the resolved archive
2. Verifying its SHA-256 checksum
3. Extracting the archive
4. Placing the executable in the bin directory
"""

from .installer import ArtifactInstaller

__all__ = ["ArtifactInstaller"]
