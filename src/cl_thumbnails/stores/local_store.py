from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import Final
from uuid import uuid4

from loguru import logger
from PIL import Image
from pydantic import ValidationError
from typing_extensions import override

from ..common.media_store import MediaStore
from ..common.schemas import AttachmentMetadata, OriginalImage


class LocalMediaStore(MediaStore):
    """
    Local filesystem implementation of MediaStore.

    Layout:
        base_dir/
            .attachments/
                <attachment_id>.json
            <relative_path>             (source files and their derived sizes)

    Files are served at `{base_url}/{relative_path}`.
    """

    _RECORDS_DIR: Final[str] = ".attachments"

    def __init__(self, base_dir: str | PathLike[str], base_url: str):
        self._base_dir: Path = Path(base_dir).expanduser().resolve()
        self._base_dir.mkdir(parents=True, exist_ok=True)
        self._records_dir: Path = self._base_dir / self._RECORDS_DIR
        self._records_dir.mkdir(exist_ok=True)
        self._base_url: str = base_url.rstrip("/")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _safe_path(self, relative_path: str) -> Path:
        """
        Resolve and validate a media-root-relative path.
        Prevents path traversal.
        """
        resolved = (self._base_dir / relative_path).resolve()
        if self._base_dir not in resolved.parents:
            raise ValueError("Invalid relative path (path traversal detected)")
        return resolved

    def _record_path(self, attachment_id: str) -> Path:
        if not attachment_id or attachment_id.startswith(".") or any(c in attachment_id for c in "/\\"):
            raise ValueError(f"Invalid attachment id: {attachment_id!r}")
        return self._records_dir / f"{attachment_id}.json"

    def _load(self, attachment_id: str) -> AttachmentMetadata | None:
        try:
            path = self._record_path(attachment_id)
        except ValueError:
            return None
        if not path.is_file():
            return None
        try:
            return AttachmentMetadata.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Unreadable attachment record {path}: {e}")
            return None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add(self, relative_path: str) -> str:
        """
        Register an existing file under base_dir as a new attachment.

        Returns:
            The new attachment id.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the path escapes base_dir
            OSError: If Pillow cannot read the image
        """
        source = self._safe_path(relative_path)
        if not source.is_file():
            raise FileNotFoundError(source)

        with Image.open(source) as img:
            width, height = img.size

        attachment_id = uuid4().hex
        metadata = AttachmentMetadata(
            file=source.relative_to(self._base_dir).as_posix(),
            width=width,
            height=height,
        )
        if not self.put_metadata(attachment_id, metadata):
            raise OSError(f"Failed to write attachment record for {relative_path}")

        logger.debug(f"Registered attachment {attachment_id} for {metadata.file}")
        return attachment_id

    # ------------------------------------------------------------------
    # MediaStore
    # ------------------------------------------------------------------

    @override
    def get_original(self, attachment_id: str) -> OriginalImage | None:
        record = self._load(attachment_id)
        if record is None or not record.file:
            return None
        return OriginalImage(
            url=f"{self._base_url}/{record.file}",
            width=record.width,
            height=record.height,
        )

    @override
    def get_source_path(self, attachment_id: str) -> Path | None:
        record = self._load(attachment_id)
        if record is None or not record.file:
            return None
        try:
            return self._safe_path(record.file)
        except ValueError:
            return None

    @override
    def get_metadata(self, attachment_id: str) -> AttachmentMetadata | None:
        return self._load(attachment_id)

    @override
    def put_metadata(self, attachment_id: str, metadata: AttachmentMetadata) -> bool:
        try:
            path = self._record_path(attachment_id)
            tmp = path.with_suffix(".json.tmp")
            _ = tmp.write_text(metadata.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
            _ = tmp.replace(path)
            return True
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to write attachment record {attachment_id}: {e}")
            return False
