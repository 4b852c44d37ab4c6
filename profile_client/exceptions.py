"""
Domain specific exception hierarchy for the profile_client package.
"""

class ProfileClientError(Exception):
    """Base exception for all library errors."""


class ConfigurationError(ProfileClientError):
    """Raised when required configuration or settings are missing."""


class ApiResponseError(ProfileClientError):
    """Raised when the remote profile API returns an error payload."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class LookupFailure(ApiResponseError):
    """Raised when a profile cannot be resolved for the requested username."""


class RelationshipOperationFailure(ApiResponseError):
    """Raised when a follow or unfollow request cannot be applied."""


class UploadValidationError(ProfileClientError):
    """Raised when a media payload does not satisfy upload requirements."""


class StorageFailure(ProfileClientError):
    """Raised when the blob storage rejects or fails an upload."""


class MetadataWriteFailure(ProfileClientError):
    """Raised when the metadata insert fails after the blob was stored."""
