"""
Client-side data access for the media profile application: profile lookups and
updates, follow state, two-phase media publishing and the theme preference.
"""

from profile_client.exceptions import (
    ApiResponseError,
    ConfigurationError,
    LookupFailure,
    MetadataWriteFailure,
    ProfileClientError,
    RelationshipOperationFailure,
    StorageFailure,
    UploadValidationError,
)
from profile_client.models import (
    MediaItem,
    Profile,
    ProfileResult,
    ProfileUpdate,
    PublishResult,
    RelationshipResult,
    UploadDescriptor,
    UploadMetadata,
)

__all__ = [
    "ApiResponseError",
    "ConfigurationError",
    "LookupFailure",
    "MediaItem",
    "MetadataWriteFailure",
    "Profile",
    "ProfileClientError",
    "ProfileResult",
    "ProfileUpdate",
    "PublishResult",
    "RelationshipOperationFailure",
    "RelationshipResult",
    "StorageFailure",
    "UploadDescriptor",
    "UploadMetadata",
    "UploadValidationError",
]
