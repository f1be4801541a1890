"""
ImageCodec Protocol - interface to the image editing backend.

compute_resize_dimensions() MUST return the exact size resize_and_save()
produces for the same arguments: cache file names are derived from it
before any resize happens.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .schemas import CropSpec


@runtime_checkable
class ImageCodec(Protocol):
    """Protocol for size computation and resizing of image files."""

    def compute_resize_dimensions(
        self,
        src_w: int,
        src_h: int,
        target_w: int,
        target_h: int,
        crop: CropSpec,
    ) -> tuple[int, int] | None:
        """
        Achievable (width, height) of a resize.

        Returns:
            None if the source cannot be resized to the target
            (target not smaller than source, degenerate input).
        """
        ...

    def resize_and_save(
        self,
        source_path: Path,
        width: int,
        height: int,
        crop: CropSpec,
        suffix: str,
    ) -> Path:
        """
        Resize the source and save it beside it as `{stem}-{suffix}{ext}`.

        Returns:
            Path of the written file.

        Raises:
            CodecFailure: If the image could not be read, resized or saved.
        """
        ...

    def detect_mime_type(self, path: Path) -> str:
        """MIME type of a file, from its content."""
        ...
