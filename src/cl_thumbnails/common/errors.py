"""Errors raised while resolving a thumbnail.

ThumbnailResolver.resolve() catches all of these and turns them into a
ResolveOutcome, so callers never see them.
"""

from .schemas import ErrorKind


class ThumbnailError(Exception):
    """Base class for thumbnail resolution errors."""

    kind: ErrorKind


class InvalidRequest(ThumbnailError):
    kind = ErrorKind.INVALID_REQUEST


class NotResizable(ThumbnailError):
    """Target is not smaller than the source image."""

    kind = ErrorKind.NOT_RESIZABLE


class RetinaInexact(ThumbnailError):
    """Retina variant could not be produced at exactly the requested size."""

    kind = ErrorKind.RETINA_INEXACT

    def __init__(self, requested: tuple[int, int], achieved: tuple[int, int]):
        self.requested: tuple[int, int] = requested
        self.achieved: tuple[int, int] = achieved
        super().__init__(
            f"Retina size {requested[0]}x{requested[1]} not reachable, got {achieved[0]}x{achieved[1]}"
        )


class SourceUnavailable(ThumbnailError):
    kind = ErrorKind.SOURCE_UNAVAILABLE

    def __init__(self, attachment_id: str):
        self.attachment_id: str = attachment_id
        super().__init__(f"No source file for attachment '{attachment_id}'")


class CodecFailure(ThumbnailError):
    """Image codec could not resize or save the image."""

    kind = ErrorKind.CODEC_FAILURE
