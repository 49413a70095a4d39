"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class SoundCloudCliError(Exception):
    """Base exception for all application-specific errors."""


class ScriptNotFoundError(SoundCloudCliError):
    """Raised when the landing page embeds no asset script URLs."""


class CredentialNotFoundError(SoundCloudCliError):
    """Raised when none of the asset scripts contains a client_id."""


class KindNotCorrectError(SoundCloudCliError):
    """Raised when a resolved entity is not of the expected kind."""

    def __init__(self, expected: str, actual: str):
        super().__init__(
            f"entity of incorrect kind: expected '{expected}', got '{actual or 'none'}'"
        )
        self.expected = expected
        self.actual = actual


class IncompatibleStreamError(SoundCloudCliError):
    """Raised when a track offers no HLS rendition in a supported format."""


class NoURLError(SoundCloudCliError):
    """Raised when the stream exchange returns an empty manifest URL."""


class HTTPStatusError(SoundCloudCliError):
    """Raised when a request completes with a non-200 status code."""

    def __init__(self, operation: str, status: int):
        super().__init__(f"{operation}: got status code {status}")
        self.operation = operation
        self.status = status


class TrackWriteError(SoundCloudCliError):
    """
    Raised when writing the tag or the audio data of a track fails part-way.
    Carries the number of bytes already written for diagnostics.
    """

    def __init__(self, message: str, bytes_written: int):
        super().__init__(message)
        self.bytes_written = bytes_written


class InvalidURLError(SoundCloudCliError):
    """Raised when a URL cannot be mapped to a track, playlist or user."""


class ConfigurationError(SoundCloudCliError):
    """Raised for issues related to configuration loading or validation."""
