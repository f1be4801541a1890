from .media_types import MediaType, detect_mime, is_image
from .profiling import timed

__all__ = ["MediaType", "detect_mime", "is_image", "timed"]
