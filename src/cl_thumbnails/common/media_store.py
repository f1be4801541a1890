"""
MediaStore Protocol - interface to the attachment store.

The store owns:
- the mapping from attachment id to source file and public URL
- the persisted metadata record of every attachment

Derived images are written next to their source file and served from the
same URL directory as the original. Implementations MUST keep that layout:
the resolver builds the URL of a derived file by replacing the basename of
the original's URL.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .schemas import AttachmentMetadata, OriginalImage


@runtime_checkable
class MediaStore(Protocol):
    """Protocol for attachment lookup and metadata persistence."""

    def get_original(self, attachment_id: str) -> OriginalImage | None:
        """Full size URL and pixel size of an attachment, or None if unknown."""
        ...

    def get_source_path(self, attachment_id: str) -> Path | None:
        """Absolute path of the attachment's source file, or None if unknown."""
        ...

    def get_metadata(self, attachment_id: str) -> AttachmentMetadata | None:
        """Persisted metadata record, or None if the attachment has none."""
        ...

    def put_metadata(self, attachment_id: str, metadata: AttachmentMetadata) -> bool:
        """
        Replace the persisted metadata record.

        Returns:
            True if written, False otherwise.
        """
        ...
