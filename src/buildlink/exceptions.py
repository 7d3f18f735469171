"""Custom exceptions"""

from enum import Enum


class FailureKind(str, Enum):
    """Structural decode failures. Each one is terminal."""

    PAYLOAD_TOO_LONG = "payload_too_long"
    MISSING_SEPARATOR = "missing_separator"
    INVALID_VERSION = "invalid_version"
    DECOMPRESSION = "decompression"
    MALFORMED_STRUCTURE = "malformed_structure"
    UNSUPPORTED_VERSION = "unsupported_version"


class BuildLinkError(Exception):
    """Base class for errors raised by this package."""


class InvalidSelectionError(BuildLinkError, ValueError):
    """Raised when a selection to be shared contains an invalid value."""

    def __init__(self, field, raw):
        super().__init__(f"Invalid value for {field}: {raw!r}")
        self.field = field
        self.raw = raw


class RegistryGrowthError(BuildLinkError):
    """Raised when a newer ID registry drops or reassigns an existing ID."""


class ShareDecodeError(BuildLinkError):
    """Raised by a decode stage when the link cannot be decoded at all."""

    kind: FailureKind

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class PayloadTooLongError(ShareDecodeError):
    """Raised before decompression when the payload exceeds the length limit."""

    kind = FailureKind.PAYLOAD_TOO_LONG

    def __init__(self):
        super().__init__("Share URL is too long to process safely")


class MissingSeparatorError(ShareDecodeError):
    """Raised when there is no '.' between version and payload."""

    kind = FailureKind.MISSING_SEPARATOR

    def __init__(self):
        super().__init__("Invalid URL format: missing version separator")


class InvalidVersionError(ShareDecodeError):
    """Raised when the version prefix is not a positive integer."""

    kind = FailureKind.INVALID_VERSION

    def __init__(self):
        super().__init__("Invalid URL format: invalid version")


class DecompressionError(ShareDecodeError):
    """Raised when the payload is not valid base64url/zlib data."""

    kind = FailureKind.DECOMPRESSION

    def __init__(self):
        super().__init__("Could not decompress URL data")


class MalformedStructureError(ShareDecodeError):
    """Raised when the decompressed text is not a wire record."""

    kind = FailureKind.MALFORMED_STRUCTURE

    def __init__(self, reason=None):
        message = "Invalid URL data format"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedVersionError(ShareDecodeError):
    """Raised when the wire record carries a schema version with no decoder."""

    kind = FailureKind.UNSUPPORTED_VERSION

    def __init__(self, version):
        super().__init__(f"URL version {version} is not supported. Please update RockTune.")
        self.version = version
