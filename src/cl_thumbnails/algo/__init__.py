"""Pure request, dimension and naming logic."""

from .dimensions import constrain_dimensions, resize_dimensions
from .naming import build_suffix, derived_path, intermediate_size_name, sibling_url
from .request import SizeRequest, normalize_request, parse_dimension_string

__all__ = [
    "SizeRequest",
    "build_suffix",
    "constrain_dimensions",
    "derived_path",
    "intermediate_size_name",
    "normalize_request",
    "parse_dimension_string",
    "resize_dimensions",
    "sibling_url",
]
