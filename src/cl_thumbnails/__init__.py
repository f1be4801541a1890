"""cl_thumbnails - On-demand, disk-cached thumbnails of stored images."""

from .codecs.pillow_codec import PillowImageCodec
from .common.config import ResolverConfig
from .common.errors import (
    CodecFailure,
    InvalidRequest,
    NotResizable,
    RetinaInexact,
    SourceUnavailable,
    ThumbnailError,
)
from .common.image_codec import ImageCodec
from .common.media_store import MediaStore
from .common.schemas import (
    AttachmentMetadata,
    ErrorKind,
    OriginalImage,
    OutcomeStatus,
    ResolveOutcome,
    SizeMetadataEntry,
    SizeSpec,
    ThumbnailDescriptor,
)
from .resolver import ThumbnailResolver
from .stores.local_store import LocalMediaStore

__version__ = "0.1.0"

__all__ = [
    "AttachmentMetadata",
    "CodecFailure",
    "ErrorKind",
    "ImageCodec",
    "InvalidRequest",
    "LocalMediaStore",
    "MediaStore",
    "NotResizable",
    "OriginalImage",
    "OutcomeStatus",
    "PillowImageCodec",
    "ResolveOutcome",
    "ResolverConfig",
    "RetinaInexact",
    "SizeMetadataEntry",
    "SizeSpec",
    "SourceUnavailable",
    "ThumbnailDescriptor",
    "ThumbnailError",
    "ThumbnailResolver",
    "__version__",
]
