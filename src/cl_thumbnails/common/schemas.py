"""Pydantic schemas for size requests, thumbnails and attachment metadata."""

from collections.abc import Sequence
from enum import StrEnum
from typing import ClassVar, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

# Valid crop anchors, serialized as "horiz-vert"
CROP_ANCHORS: tuple[str, ...] = (
    "left-top",
    "center-top",
    "right-top",
    "left-center",
    "center-center",
    "right-center",
    "left-bottom",
    "center-bottom",
    "right-bottom",
)

# bool (fill-crop / no crop), a "horiz-vert" string, or an anchor pair
CropSpec = bool | str | tuple[str, str]


# ─────────────────────────────────────────────────────────────
# Size requests
# ─────────────────────────────────────────────────────────────


class SizeSpec(BaseModel):
    """Struct form of a size request.

    Attributes:
        width: Target width in pixels (0 = unconstrained)
        height: Target height in pixels (0 = unconstrained)
        crop: Crop flag, "horiz-vert" anchor or anchor pair
        size: Optional intermediate size name to register the result under
    """

    width: int | str | None = None
    height: int | str | None = None
    crop: bool | str | Sequence[str] = "center-center"
    size: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


class NormalizedSize(BaseModel):
    """A size request reduced to (width, height, crop)."""

    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    crop: CropSpec = True
    size_name: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def is_named_preset(self) -> bool:
        return self.size_name is not None

    @property
    def crop_suffix(self) -> str:
        """Anchor name used in file names, empty unless the crop is a valid anchor."""
        if isinstance(self.crop, str) and self.crop in CROP_ANCHORS:
            return self.crop
        return ""

    @property
    def crop_arg(self) -> CropSpec:
        """Crop value handed to the dimension calculator and the codec."""
        if self.crop_suffix:
            horiz, vert = self.crop_suffix.split("-")
            return (horiz, vert)
        return self.crop


class ResizeBox(NamedTuple):
    """Source box and destination size of a resize, as computed ahead of it."""

    dst_x: int
    dst_y: int
    src_x: int
    src_y: int
    dst_w: int
    dst_h: int
    src_w: int
    src_h: int


# ─────────────────────────────────────────────────────────────
# Attachment data
# ─────────────────────────────────────────────────────────────


class OriginalImage(BaseModel):
    """Full size image of an attachment."""

    url: str
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)


class SizeMetadataEntry(BaseModel):
    """A derived size registered in an attachment's metadata."""

    file: str = Field(..., description="File name of the derived image (no directory)")
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    mime_type: str = Field("", alias="mime-type")
    generated: bool = Field(True, description="Produced on demand by the thumbnail resolver")

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)


class AttachmentMetadata(BaseModel):
    """Persisted metadata record of an attachment."""

    file: str = Field("", description="Source file path relative to the media root")
    width: int = Field(0, ge=0)
    height: int = Field(0, ge=0)
    sizes: dict[str, SizeMetadataEntry] = Field(default_factory=dict)


# ─────────────────────────────────────────────────────────────
# Resolver results
# ─────────────────────────────────────────────────────────────


class ThumbnailDescriptor(BaseModel):
    """Image returned to the caller: a resized variant or the original."""

    url: str
    width: int
    height: int
    retina: str | None = None
    size_name: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class OutcomeStatus(StrEnum):
    OK = "ok"
    SKIP = "skip"
    ERROR = "error"


class ErrorKind(StrEnum):
    INVALID_REQUEST = "invalid_request"
    NOT_RESIZABLE = "not_resizable"
    RETINA_INEXACT = "retina_inexact"
    SOURCE_UNAVAILABLE = "source_unavailable"
    CODEC_FAILURE = "codec_failure"


class ResolveOutcome(BaseModel):
    """Tagged result of ThumbnailResolver.resolve().

    - ok: `descriptor` is set; `reason` is set when it is the original
      image served as a fallback
    - skip: deliberate non-result (retina variant not producible)
    - error: the request could not be served at all
    """

    status: OutcomeStatus
    descriptor: ThumbnailDescriptor | None = None
    reason: ErrorKind | None = None
    message: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @classmethod
    def ok(cls, descriptor: ThumbnailDescriptor, reason: ErrorKind | None = None) -> "ResolveOutcome":
        return cls(status=OutcomeStatus.OK, descriptor=descriptor, reason=reason)

    @classmethod
    def skip(cls, reason: ErrorKind, message: str | None = None) -> "ResolveOutcome":
        return cls(status=OutcomeStatus.SKIP, reason=reason, message=message)

    @classmethod
    def error(cls, reason: ErrorKind, message: str | None = None) -> "ResolveOutcome":
        return cls(status=OutcomeStatus.ERROR, reason=reason, message=message)

    @property
    def is_ok(self) -> bool:
        return self.status == OutcomeStatus.OK
