"""
Pydantic data models for release_manifest.json.

The manifest is a static table: one ReleaseArtifact per published target, each
carrying the archive URL, its SHA-256 checksum and the name of the executable inside.
Validation runs when the manifest is loaded, so malformed checksums or
overlapping targets are rejected before any network call.
"""

import string
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .platform_key import CpuFamily, OperatingSystem, PlatformKey

SHA256_HEX_LENGTH = 64
ANY = "any"


class ArtifactTarget(BaseModel):
    """
    The platforms an artifact is published for. "any" matches every value.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    os: OperatingSystem
    cpu_family: Union[CpuFamily, Literal["any"]] = Field(ANY, alias="cpu")
    bits: Union[Literal[32, 64], Literal["any"]] = ANY

    def matches(self, platform: PlatformKey) -> bool:
        if self.os != platform.os:
            return False
        if self.cpu_family != ANY and self.cpu_family != platform.cpu_family:
            return False
        if self.bits != ANY and self.bits != platform.bits:
            return False
        return True

    def describe(self) -> str:
        cpu = getattr(self.cpu_family, "value", self.cpu_family)
        return f"{self.os.value}/{cpu}/{self.bits}"


class ReleaseArtifact(BaseModel):
    """
    A downloadable archive containing the prebuilt executable for one target.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(..., description="HTTPS URL of the archive")
    sha256: str = Field(..., description="SHA-256 of the archive (64 hex chars)")
    binary_name: str = Field(..., alias="binaryName", description="Executable inside the archive")
    archive_type: Literal["tar.gz"] = Field("tar.gz", alias="archiveType")
    target: ArtifactTarget

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith("https://"):
            raise ValueError(f"Artifact URL must use https, got {v}")
        return v

    @field_validator("sha256")
    @classmethod
    def validate_sha256(cls, v: str) -> str:
        """Validate SHA-256 is exactly 64 hex characters."""
        if len(v) != SHA256_HEX_LENGTH:
            raise ValueError(
                f"SHA-256 must be {SHA256_HEX_LENGTH} hex characters, got {len(v)}"
            )
        if not all(c in string.hexdigits for c in v):
            raise ValueError("SHA-256 must contain only hex characters")
        return v.lower()

    @field_validator("binary_name")
    @classmethod
    def validate_binary_name(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"binaryName must be a plain file name, got {v!r}")
        return v


class ReleaseManifest(BaseModel):
    """
    Complete release manifest.

    Structure:
    {
      "_description": "...",
      "name": "oshiv",
      "version": "1.4.0",
      "artifacts": {
        "target_id": {
          "url": "...",
          "sha256": "...",
          "binaryName": "...",
          "archiveType": "tar.gz",
          "target": {"os": "...", "cpu": "...", "bits": ...}
        },
        ...
      }
    }
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    description: Optional[str] = Field(None, alias="_description")
    name: str
    version: str
    homepage: Optional[str] = None
    license: Optional[str] = None
    artifacts: Dict[str, ReleaseArtifact]

    @model_validator(mode="after")
    def validate_targets(self) -> "ReleaseManifest":
        """
        Every detectable platform may match at most one artifact.
        """
        if not self.artifacts:
            raise ValueError("Manifest must list at least one artifact")

        for platform in PlatformKey.all_keys():
            matching = self.targets_for(platform)
            if len(matching) > 1:
                raise ValueError(
                    f"Platform {platform.describe()} matches more than one artifact: "
                    f"{', '.join(matching)}"
                )
        return self

    def targets_for(self, platform: PlatformKey) -> List[str]:
        return [
            target_id
            for target_id, artifact in self.artifacts.items()
            if artifact.target.matches(platform)
        ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReleaseManifest":
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
