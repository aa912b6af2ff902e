"""
This file contains the exceptions raised by oshiv_installer
"""


class InstallerException(Exception):
    """
    Base class for all exceptions raised by oshiv_installer
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InstallerConfigurationError(InstallerException):
    """
    Raised when the release manifest or an installer.toml file is malformed.

    Always raised before any network call is made.
    """

    pass


class InstallError(InstallerException):
    """
    Base class for failures of a single install invocation. All of them are terminal.
    """

    pass


class UnsupportedPlatform(InstallError):
    """No release artifact is published for the detected platform."""

    def __init__(self, platform: str, supported_targets: list):
        self.platform = platform
        self.supported_targets = list(supported_targets)
        super().__init__(
            f"No release artifact for platform {platform}. "
            f"Supported targets: {', '.join(self.supported_targets)}"
        )


class DownloadFailure(InstallError):
    """The archive could not be fetched (network or HTTP error)."""

    pass


class ChecksumMismatch(InstallError):
    """The SHA-256 digest of the downloaded archive differs from the expected one."""

    def __init__(self, url: str, expected: str, actual: str):
        self.url = url
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Checksum mismatch for {url}: expected {expected}, got {actual}"
        )


class ExtractionFailure(InstallError):
    """The archive is corrupt, unsafe, or does not contain the expected executable."""

    pass


class InstallWriteFailure(InstallError):
    """The executable could not be written into the bin directory."""

    pass
