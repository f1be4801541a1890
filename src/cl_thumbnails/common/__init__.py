"""Common module - protocols, schemas, errors and configuration."""

from .config import ResolverConfig
from .errors import (
    CodecFailure,
    InvalidRequest,
    NotResizable,
    RetinaInexact,
    SourceUnavailable,
    ThumbnailError,
)
from .image_codec import ImageCodec
from .media_store import MediaStore
from .schemas import (
    AttachmentMetadata,
    ErrorKind,
    OriginalImage,
    OutcomeStatus,
    ResolveOutcome,
    SizeMetadataEntry,
    SizeSpec,
    ThumbnailDescriptor,
)

__all__ = [
    "AttachmentMetadata",
    "CodecFailure",
    "ErrorKind",
    "ImageCodec",
    "InvalidRequest",
    "MediaStore",
    "NotResizable",
    "OriginalImage",
    "OutcomeStatus",
    "ResolveOutcome",
    "ResolverConfig",
    "RetinaInexact",
    "SizeMetadataEntry",
    "SizeSpec",
    "SourceUnavailable",
    "ThumbnailDescriptor",
    "ThumbnailError",
]
