"""
Release manifest loading and artifact resolution.

This package handles:
1. Loading and validating the release manifest from JSON
2. Resolving the artifact published for a platform
3. Planning where the resolved executable is installed
"""

from .resolver import (
    ArtifactResolver,
    InstallPlan,
    InstallStatus,
    load_release_manifest,
)

__all__ = ["ArtifactResolver", "InstallPlan", "InstallStatus", "load_release_manifest"]
