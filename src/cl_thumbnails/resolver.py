"""On-demand thumbnail resolution with an on-disk cache.

ThumbnailResolver turns (attachment id, size request) into a resized image
next to the attachment's source file, reusing the file when it already
exists and registering new files in the attachment's metadata.
"""

from pathlib import Path

from loguru import logger

from .algo.naming import build_suffix, derived_path, intermediate_size_name, sibling_url
from .algo.request import SizeRequest, normalize_request
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
    ErrorKind,
    NormalizedSize,
    OriginalImage,
    ResolveOutcome,
    SizeMetadataEntry,
    ThumbnailDescriptor,
)


def _original_descriptor(original: OriginalImage) -> ThumbnailDescriptor:
    return ThumbnailDescriptor(url=original.url, width=original.width, height=original.height)


class ThumbnailResolver:
    """
    Resolves resized variants of attachments.

    Every failure degrades: a non-retina request falls back to the original
    image, a retina request yields no image. Nothing is raised to the caller.
    """

    def __init__(
        self,
        media_store: MediaStore,
        codec: ImageCodec,
        config: ResolverConfig | None = None,
    ):
        self.media_store: MediaStore = media_store
        self.codec: ImageCodec = codec
        self.config: ResolverConfig = config or ResolverConfig()

    def resolve_thumbnail(
        self,
        attachment_id: str,
        size: SizeRequest,
        retina: bool = False,
    ) -> ThumbnailDescriptor | None:
        """Resolve a thumbnail; None when no image can be served."""
        return self.resolve(attachment_id, size, retina=retina).descriptor

    def resolve(
        self,
        attachment_id: str,
        size: SizeRequest,
        retina: bool = False,
    ) -> ResolveOutcome:
        """
        Resolve a thumbnail of an attachment.

        Args:
            attachment_id: Attachment to resize
            size: Preset name, "W", "WxH", "WxHxANCHOR", SizeSpec or mapping
            retina: Request a retina variant; it must hit the requested size
                    exactly and never falls back to the original

        Returns:
            ResolveOutcome: ok with a descriptor, skip for a retina variant
            that cannot be produced, error for unusable requests.
        """
        try:
            return self._resolve(attachment_id, size, retina)

        except (InvalidRequest, SourceUnavailable) as exc:
            logger.warning(f"Cannot resolve thumbnail of attachment {attachment_id!r}: {exc}")
            return ResolveOutcome.error(exc.kind, str(exc))

        except (NotResizable, RetinaInexact, CodecFailure) as exc:
            # Only retina requests get here
            logger.debug(f"Skipping retina variant of attachment {attachment_id!r}: {exc}")
            return ResolveOutcome.skip(exc.kind, str(exc))

        except ThumbnailError as exc:
            logger.error(f"Thumbnail resolution failed for attachment {attachment_id!r}: {exc}")
            return ResolveOutcome.error(exc.kind, str(exc))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _resolve(self, attachment_id: str, request: SizeRequest, retina: bool) -> ResolveOutcome:
        if not attachment_id:
            raise InvalidRequest("Empty attachment id")

        size = normalize_request(request, self.config.presets)

        original = self.media_store.get_original(attachment_id)
        source_path = self.media_store.get_source_path(attachment_id)
        if original is None or source_path is None:
            raise SourceUnavailable(attachment_id)

        dims = self.codec.compute_resize_dimensions(
            original.width,
            original.height,
            size.width,
            size.height,
            size.crop_arg,
        )

        dst_w, dst_h = dims if dims is not None else (0, 0)

        if (
            dims is None
            or dst_w > original.width
            or dst_h > original.height
            or (dst_w == original.width and dst_h == original.height)
        ):
            if retina:
                raise NotResizable(
                    f"{size.width}x{size.height} is not smaller than "
                    f"{original.width}x{original.height}"
                )
            return ResolveOutcome.ok(_original_descriptor(original), ErrorKind.NOT_RESIZABLE)

        if retina and (dst_w, dst_h) != (size.width, size.height):
            raise RetinaInexact((size.width, size.height), (dst_w, dst_h))

        suffix = build_suffix(dst_w, dst_h, size.crop_suffix, retina=retina)
        size_name = size.size_name or intermediate_size_name(self.config.name_prefix, suffix)
        cache_path = derived_path(source_path, suffix)

        if cache_path.is_file():
            logger.debug(f"Thumbnail cache hit: {cache_path}")
            return ResolveOutcome.ok(
                ThumbnailDescriptor(
                    url=sibling_url(original.url, cache_path),
                    width=dst_w,
                    height=dst_h,
                    retina=self._retina_companion(attachment_id, size, dst_w, dst_h, retina),
                    size_name=size_name,
                )
            )

        logger.debug(f"Thumbnail cache miss: {cache_path}")
        try:
            new_path = self.codec.resize_and_save(
                source_path,
                size.width,
                size.height,
                size.crop_arg,
                suffix,
            )
        except CodecFailure as exc:
            if retina:
                raise
            return self._serve_original(attachment_id, original, suffix, exc)
        except Exception as exc:
            # Codec implementations may raise their own errors
            if retina:
                raise CodecFailure(str(exc)) from exc
            return self._serve_original(attachment_id, original, suffix, exc)

        descriptor = ThumbnailDescriptor(
            url=sibling_url(original.url, new_path),
            width=dst_w,
            height=dst_h,
            retina=self._retina_companion(attachment_id, size, dst_w, dst_h, retina),
            size_name=size_name,
        )

        self._update_metadata(attachment_id, size_name, Path(new_path), dst_w, dst_h)

        return ResolveOutcome.ok(descriptor)

    def _serve_original(
        self,
        attachment_id: str,
        original: OriginalImage,
        suffix: str,
        exc: Exception,
    ) -> ResolveOutcome:
        logger.warning(
            f"Serving original of attachment {attachment_id!r}, resize to {suffix} failed: {exc}"
        )
        return ResolveOutcome.ok(_original_descriptor(original), ErrorKind.CODEC_FAILURE)

    def _retina_companion(
        self,
        attachment_id: str,
        size: NormalizedSize,
        dst_w: int,
        dst_h: int,
        retina: bool,
    ) -> str | None:
        """URL of the 2x variant of a resolved thumbnail, if one can be produced."""
        if retina or not self.config.retina_support:
            return None

        companion = NormalizedSize(width=dst_w * 2, height=dst_h * 2, crop=size.crop)
        outcome = self.resolve(attachment_id, companion, retina=True)
        if outcome.is_ok and outcome.descriptor is not None:
            return outcome.descriptor.url
        return None

    def _update_metadata(
        self,
        attachment_id: str,
        size_name: str,
        new_path: Path,
        dst_w: int,
        dst_h: int,
    ) -> None:
        """Register a new file under `size_name`; failures are logged, never raised."""
        try:
            written = self._store_size_entry(attachment_id, size_name, new_path, dst_w, dst_h)
        except Exception as e:
            logger.warning(f"Metadata update for attachment {attachment_id!r} failed: {e}")
            return

        if not written:
            logger.warning(f"Metadata update for attachment {attachment_id!r} was not stored")

    def _store_size_entry(
        self,
        attachment_id: str,
        size_name: str,
        new_path: Path,
        dst_w: int,
        dst_h: int,
    ) -> bool:
        """Write the entry unless an identical one exists. Returns False if the store refused it."""
        metadata = self.media_store.get_metadata(attachment_id)
        if metadata is None:
            return True

        entry = metadata.sizes.get(size_name)
        if entry is not None and entry.width == dst_w and entry.height == dst_h:
            return True

        metadata.sizes[size_name] = SizeMetadataEntry(
            file=new_path.name,
            width=dst_w,
            height=dst_h,
            mime_type=self.codec.detect_mime_type(new_path),
            generated=True,
        )
        return self.media_store.put_metadata(attachment_id, metadata)
