import dataclasses

from .platform_key import PlatformKey
from .release_manifest import ReleaseArtifact


@dataclasses.dataclass(frozen=True)
class InstalledBinary:
    """
    The executable placed in the bin directory by one install invocation
    """

    path: str
    target_id: str
    artifact: ReleaseArtifact
    platform: PlatformKey
    sha256: str
