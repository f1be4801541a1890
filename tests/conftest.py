"""Test configuration and fixtures for cl_thumbnails.

This module provides:
- Generated sample images (Pillow)
- A temporary LocalMediaStore with a registered attachment
- Mock MediaStore / ImageCodec collaborators for resolver policy tests
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from cl_thumbnails.algo.dimensions import resize_dimensions
from cl_thumbnails.algo.naming import derived_path
from cl_thumbnails.common.image_codec import ImageCodec
from cl_thumbnails.common.media_store import MediaStore
from cl_thumbnails.common.schemas import AttachmentMetadata, CropSpec, OriginalImage
from cl_thumbnails.stores.local_store import LocalMediaStore

BASE_URL = "https://media.example.com/uploads"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: tests using Pillow and the local media store end to end",
    )


def make_image(path: Path, width: int, height: int, fmt: str = "JPEG") -> Path:
    """Write a gradient image so resized output is not a flat colour."""
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new("RGB", (width, height))
    pixels = img.load()
    for x in range(0, width, 7):
        for y in range(0, height, 7):
            pixels[x, y] = (x % 256, y % 256, (x + y) % 256)
    img.save(path, format=fmt)
    return path


# ============================================================================
# Real images and store
# ============================================================================


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    root = tmp_path / "media"
    root.mkdir()
    return root


@pytest.fixture
def sample_image_path(media_root: Path) -> Path:
    """1000x800 JPEG under media_root/2024/05."""
    return make_image(media_root / "2024" / "05" / "photo.jpg", 1000, 800)


@pytest.fixture
def local_store(media_root: Path) -> LocalMediaStore:
    return LocalMediaStore(media_root, BASE_URL)


@pytest.fixture
def attachment_id(local_store: LocalMediaStore, sample_image_path: Path) -> str:
    return local_store.add("2024/05/photo.jpg")


# ============================================================================
# Mock collaborators
# ============================================================================


class FakeAttachment:
    """In-memory attachment backing the mock store."""

    def __init__(self, source_path: Path, width: int, height: int):
        self.source_path: Path = source_path
        self.original: OriginalImage = OriginalImage(
            url=f"{BASE_URL}/2024/05/{source_path.name}",
            width=width,
            height=height,
        )
        self.metadata: AttachmentMetadata | None = AttachmentMetadata(
            file=f"2024/05/{source_path.name}",
            width=width,
            height=height,
        )


@pytest.fixture
def fake_attachment(tmp_path: Path) -> FakeAttachment:
    """1000x1000 source file on disk (content is irrelevant to the mocks)."""
    source = tmp_path / "uploads" / "photo.jpg"
    source.parent.mkdir(parents=True)
    _ = source.write_bytes(b"source")
    return FakeAttachment(source, 1000, 1000)


@pytest.fixture
def mock_store(fake_attachment: FakeAttachment) -> MagicMock:
    """MediaStore mock serving `fake_attachment` under id "42"."""
    store = MagicMock(spec=MediaStore)

    def lookup(attachment_id: str, value):
        return value if attachment_id == "42" else None

    store.get_original.side_effect = lambda aid: lookup(aid, fake_attachment.original)
    store.get_source_path.side_effect = lambda aid: lookup(aid, fake_attachment.source_path)
    store.get_metadata.side_effect = lambda aid: (
        fake_attachment.metadata.model_copy(deep=True)
        if aid == "42" and fake_attachment.metadata is not None
        else None
    )

    def put(aid: str, metadata: AttachmentMetadata) -> bool:
        fake_attachment.metadata = metadata.model_copy(deep=True)
        return True

    store.put_metadata.side_effect = put
    return store


@pytest.fixture
def mock_codec() -> MagicMock:
    """ImageCodec mock computing real dimensions and writing placeholder files."""
    codec = MagicMock(spec=ImageCodec)

    def compute(src_w: int, src_h: int, target_w: int, target_h: int, crop: CropSpec):
        box = resize_dimensions(src_w, src_h, target_w, target_h, crop)
        return None if box is None else (box.dst_w, box.dst_h)

    def resize_and_save(source_path: Path, width: int, height: int, crop: CropSpec, suffix: str):
        output = derived_path(source_path, suffix)
        _ = output.write_bytes(b"resized")
        return output

    codec.compute_resize_dimensions.side_effect = compute
    codec.resize_and_save.side_effect = resize_and_save
    codec.detect_mime_type.return_value = "image/jpeg"
    return codec
