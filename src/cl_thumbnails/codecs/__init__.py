"""Image codec implementations."""

from .pillow_codec import PillowImageCodec

__all__ = ["PillowImageCodec"]
