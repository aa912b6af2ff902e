"""
Platform identification: the (OS, CPU family, bitness) tuple used to select a release artifact.
"""

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class OperatingSystem(str, Enum):
    """
    Operating systems the installer can detect
    """

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"
    OTHER = "other"


class CpuFamily(str, Enum):
    """
    CPU families the installer can detect
    """

    INTEL = "intel"
    ARM = "arm"
    OTHER = "other"


SUPPORTED_BITS = (32, 64)


@dataclass(frozen=True)
class PlatformKey:
    """
    The detected host platform. Exactly one is resolved per run.
    """

    os: OperatingSystem
    cpu_family: CpuFamily
    bits: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "os", OperatingSystem(self.os))
        object.__setattr__(self, "cpu_family", CpuFamily(self.cpu_family))
        if self.bits not in SUPPORTED_BITS:
            raise ValueError(f"bits must be one of {SUPPORTED_BITS}, got {self.bits}")

    def describe(self) -> str:
        return f"{self.os.value}/{self.cpu_family.value}/{self.bits}"

    @classmethod
    def all_keys(cls) -> Iterator["PlatformKey"]:
        """Every platform key that can be detected."""
        for os_, cpu, bits in itertools.product(OperatingSystem, CpuFamily, SUPPORTED_BITS):
            yield cls(os_, cpu, bits)
