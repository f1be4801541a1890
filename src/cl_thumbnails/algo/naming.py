"""Cache file names, URLs and intermediate size names of derived images."""

from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit, urlunsplit

RETINA_MARK = "@2x"


def _half(value: int) -> str:
    # Odd sizes keep their ".5" so every retina size gets its own name
    return str(value // 2) if value % 2 == 0 else f"{value // 2}.5"


def build_suffix(width: int, height: int, crop_suffix: str = "", retina: bool = False) -> str:
    """
    File name suffix of a derived image: "{w}x{h}[-{anchor}][@2x]".

    For a retina image, width and height are the doubled size; the suffix
    carries the base size it belongs to, e.g. 301x201 -> "150.5x100.5@2x".
    """
    if retina:
        suffix = f"{_half(width)}x{_half(height)}"
    else:
        suffix = f"{width}x{height}"
    if crop_suffix:
        suffix = f"{suffix}-{crop_suffix}"
    if retina:
        suffix = f"{suffix}{RETINA_MARK}"
    return suffix


def derived_path(source_path: str | Path, suffix: str) -> Path:
    """Path of a derived image: same directory, "{stem}-{suffix}{ext}"."""
    source = Path(source_path)
    return source.with_name(f"{source.stem}-{suffix}{source.suffix}")


def sibling_url(original_url: str, file_path: str | Path) -> str:
    """
    URL of a file stored beside the original, built by swapping the basename.

    Query string and fragment of the original URL are kept.
    """
    parts = urlsplit(original_url)
    path = PurePosixPath(parts.path)
    new_path = str(path.with_name(Path(file_path).name))
    return urlunsplit((parts.scheme, parts.netloc, new_path, parts.query, parts.fragment))


def intermediate_size_name(prefix: str, suffix: str) -> str:
    return f"{prefix}_{suffix}"
