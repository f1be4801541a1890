from enum import StrEnum
from pathlib import Path

import magic
from loguru import logger

DEFAULT_MIME = "application/octet-stream"


class MediaType(StrEnum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "text"
    FILE = "file"

    @classmethod
    def from_mime(cls, file_type: str) -> "MediaType":
        if file_type.startswith("image"):
            return MediaType.IMAGE
        elif file_type.startswith("video"):
            return MediaType.VIDEO
        elif file_type.startswith("audio"):
            return MediaType.AUDIO
        elif file_type.startswith("text"):
            return MediaType.TEXT
        else:
            return MediaType.FILE


def detect_mime(path: str | Path) -> str:
    """MIME type of a file, sniffed from its content.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        file_type = magic.Magic(mime=True).from_file(str(path))
    except magic.MagicException as e:
        logger.warning(f"Could not sniff MIME type of {path}: {e}")
        return DEFAULT_MIME

    return file_type or DEFAULT_MIME


def is_image(path: str | Path) -> bool:
    return MediaType.from_mime(detect_mime(path)) == MediaType.IMAGE
