"""Unit tests for the Pillow image codec.

Tests dimension computation, resizing with crop anchors, output naming,
format handling and error wrapping.
"""

from pathlib import Path

import pytest
from PIL import Image

from cl_thumbnails.codecs.pillow_codec import PillowImageCodec
from cl_thumbnails.common.errors import CodecFailure
from cl_thumbnails.common.image_codec import ImageCodec

from conftest import make_image


@pytest.fixture
def codec() -> PillowImageCodec:
    return PillowImageCodec()


def test_codec_implements_protocol(codec: PillowImageCodec):
    assert isinstance(codec, ImageCodec)


# ============================================================================
# DIMENSION TESTS
# ============================================================================


def test_compute_resize_dimensions(codec: PillowImageCodec):
    assert codec.compute_resize_dimensions(1000, 800, 300, 200, True) == (300, 200)
    assert codec.compute_resize_dimensions(1000, 800, 500, 500, False) == (500, 400)


def test_compute_resize_dimensions_not_resizable(codec: PillowImageCodec):
    assert codec.compute_resize_dimensions(1000, 800, 1000, 800, True) is None
    assert codec.compute_resize_dimensions(1000, 800, 0, 0, True) is None


# ============================================================================
# RESIZE TESTS
# ============================================================================


def test_resize_and_save_crops_to_exact_size(codec: PillowImageCodec, sample_image_path: Path):
    """Test a fill crop writes a file of exactly the computed size beside the source."""
    output = codec.resize_and_save(
        sample_image_path, 300, 200, ("center", "center"), "300x200-center-center"
    )

    assert output == sample_image_path.parent / "photo-300x200-center-center.jpg"
    assert output.is_file()
    with Image.open(output) as img:
        assert img.size == (300, 200)
        assert img.format == "JPEG"


def test_resize_and_save_matches_computed_dimensions(
    codec: PillowImageCodec, sample_image_path: Path
):
    """Test the written size equals compute_resize_dimensions for several crops."""
    cases = [
        (250, 250, True, "250x250"),
        (400, 0, True, "400x320"),
        (500, 500, False, "500x400"),
        (640, 120, ("left", "bottom"), "640x120-left-bottom"),
    ]
    for width, height, crop, suffix in cases:
        expected = codec.compute_resize_dimensions(1000, 800, width, height, crop)

        output = codec.resize_and_save(sample_image_path, width, height, crop, suffix)

        with Image.open(output) as img:
            assert img.size == expected, suffix


def test_resize_and_save_keeps_png_alpha(codec: PillowImageCodec, tmp_path: Path):
    source = tmp_path / "logo.png"
    Image.new("RGBA", (400, 400), (255, 0, 0, 128)).save(source)

    output = codec.resize_and_save(source, 100, 100, True, "100x100")

    assert output.name == "logo-100x100.png"
    with Image.open(output) as img:
        assert img.format == "PNG"
        assert img.mode == "RGBA"
        assert img.size == (100, 100)


def test_resize_and_save_quality(sample_image_path: Path):
    """Test a lower JPEG quality produces a smaller file."""
    high = PillowImageCodec(jpeg_quality=95).resize_and_save(
        sample_image_path, 300, 200, True, "high"
    )
    low = PillowImageCodec(jpeg_quality=20).resize_and_save(
        sample_image_path, 300, 200, True, "low"
    )

    assert low.stat().st_size < high.stat().st_size


# ============================================================================
# ERROR TESTS
# ============================================================================


def test_resize_missing_source(codec: PillowImageCodec, tmp_path: Path):
    with pytest.raises(CodecFailure):
        _ = codec.resize_and_save(tmp_path / "missing.jpg", 100, 100, True, "100x100")


def test_resize_non_image(codec: PillowImageCodec, tmp_path: Path):
    source = tmp_path / "notes.jpg"
    _ = source.write_text("not an image at all\n" * 20)

    with pytest.raises(CodecFailure):
        _ = codec.resize_and_save(source, 100, 100, True, "100x100")

    assert not (tmp_path / "notes-100x100.jpg").exists()


def test_resize_target_not_smaller(codec: PillowImageCodec, tmp_path: Path):
    source = make_image(tmp_path / "small.jpg", 80, 60)

    with pytest.raises(CodecFailure):
        _ = codec.resize_and_save(source, 100, 100, True, "100x100")


# ============================================================================
# MIME & NAMING TESTS
# ============================================================================


def test_detect_mime_type(codec: PillowImageCodec, sample_image_path: Path, tmp_path: Path):
    png = tmp_path / "x.png"
    Image.new("RGB", (10, 10)).save(png)

    assert codec.detect_mime_type(sample_image_path) == "image/jpeg"
    assert codec.detect_mime_type(png) == "image/png"


def test_generate_filename():
    assert PillowImageCodec.generate_filename("/srv/a/photo.jpeg", "64x64") == Path(
        "/srv/a/photo-64x64.jpeg"
    )


def test_resize_decompression_bomb(
    codec: PillowImageCodec, sample_image_path: Path, monkeypatch: pytest.MonkeyPatch
):
    """Test Pillow's oversized-image guard is reported as a codec failure."""
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    with pytest.raises(CodecFailure):
        _ = codec.resize_and_save(sample_image_path, 300, 200, True, "300x200")
