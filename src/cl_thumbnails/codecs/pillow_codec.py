"""Pillow implementation of the ImageCodec protocol."""

from pathlib import Path
from typing import Any

from typing_extensions import override

from loguru import logger
from PIL import Image

from ..algo.dimensions import resize_dimensions
from ..algo.naming import derived_path
from ..common.errors import CodecFailure
from ..common.image_codec import ImageCodec
from ..common.schemas import CropSpec
from ..utils.media_types import detect_mime, is_image
from ..utils.profiling import timed


class PillowImageCodec(ImageCodec):
    """
    Resizes images with Pillow.

    Output is written beside the source as `{stem}-{suffix}{ext}`, in the
    source's format.
    """

    def __init__(self, jpeg_quality: int = 82):
        self.jpeg_quality: int = jpeg_quality

    @staticmethod
    def generate_filename(source_path: str | Path, suffix: str) -> Path:
        return derived_path(source_path, suffix)

    @override
    def compute_resize_dimensions(
        self,
        src_w: int,
        src_h: int,
        target_w: int,
        target_h: int,
        crop: CropSpec,
    ) -> tuple[int, int] | None:
        box = resize_dimensions(src_w, src_h, target_w, target_h, crop)
        if box is None:
            return None
        return box.dst_w, box.dst_h

    @override
    @timed
    def resize_and_save(
        self,
        source_path: Path,
        width: int,
        height: int,
        crop: CropSpec,
        suffix: str,
    ) -> Path:
        source_path = Path(source_path)
        output_path = self.generate_filename(source_path, suffix)

        try:
            if not is_image(source_path):
                raise CodecFailure(f"Not an image: {source_path}")

            with Image.open(source_path) as img:
                box = resize_dimensions(img.width, img.height, width, height, crop)
                if box is None:
                    raise CodecFailure(
                        f"Cannot resize {img.width}x{img.height} image to {width}x{height}"
                    )

                region = (box.src_x, box.src_y, box.src_x + box.src_w, box.src_y + box.src_h)
                resized = img.resize(
                    (box.dst_w, box.dst_h),
                    Image.Resampling.LANCZOS,
                    box=region,
                )

                save_kwargs: dict[str, Any] = {}
                if img.format == "JPEG":
                    save_kwargs["quality"] = self.jpeg_quality
                    if resized.mode not in ("RGB", "L", "CMYK"):
                        resized = resized.convert("RGB")

                resized.save(output_path, format=img.format, **save_kwargs)

        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            logger.error(f"Resize of {source_path} to {width}x{height} failed: {exc}")
            raise CodecFailure(str(exc)) from exc

        return output_path

    @override
    def detect_mime_type(self, path: Path) -> str:
        return detect_mime(path)
