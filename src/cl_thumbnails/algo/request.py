"""Size request normalization."""

import re
from collections.abc import Mapping

from pydantic import ValidationError

from ..common.errors import InvalidRequest
from ..common.schemas import CropSpec, NormalizedSize, SizeSpec

SizeRequest = str | SizeSpec | NormalizedSize | Mapping[str, object]

_LEADING_INT = re.compile(r"^\s*[-+]?\d+")


def to_dimension(value: object) -> int:
    """Coerce a width/height value to a non-negative int, non-numeric values to 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return abs(value)
    if isinstance(value, float):
        return abs(int(value))
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return abs(int(match.group())) if match else 0
    return 0


def _to_crop(value: object) -> CropSpec:
    if isinstance(value, (bool, str)):
        return value
    if isinstance(value, (list, tuple)):
        return "-".join(str(part) for part in value)
    return bool(value)


def parse_dimension_string(value: str) -> NormalizedSize:
    """
    Parse "W", "WxH" or "WxHxANCHOR".

    "W" and "WxH" crop to fill; the anchor of "WxHxANCHOR" is kept as given,
    valid or not.

    Raises:
        InvalidRequest: If the string is empty or has more than three parts
    """
    text = value.strip()
    if not text:
        raise InvalidRequest("Empty size string")

    parts = text.split("x")
    if len(parts) == 1:
        width = to_dimension(parts[0])
        return NormalizedSize(width=width, height=width, crop=True)
    if len(parts) == 2:
        return NormalizedSize(
            width=to_dimension(parts[0]),
            height=to_dimension(parts[1]),
            crop=True,
        )
    if len(parts) == 3:
        return NormalizedSize(
            width=to_dimension(parts[0]),
            height=to_dimension(parts[1]),
            crop=parts[2].strip(),
        )
    raise InvalidRequest(f"Malformed size string: {value!r}")


def normalize_spec(spec: SizeSpec, size_name: str | None = None) -> NormalizedSize:
    """Normalize the struct form; `size_name` overrides `spec.size`."""
    return NormalizedSize(
        width=to_dimension(spec.width),
        height=to_dimension(spec.height),
        crop=_to_crop(spec.crop),
        size_name=size_name or spec.size or None,
    )


def normalize_request(
    request: SizeRequest,
    presets: Mapping[str, SizeSpec] | None = None,
) -> NormalizedSize:
    """
    Reduce any size request to a NormalizedSize.

    Args:
        request: Preset name, dimension string, SizeSpec or mapping with
                 width/height/crop/size keys
        presets: Named sizes; a string equal to a preset name selects it

    Raises:
        InvalidRequest: If the request cannot be interpreted
    """
    if isinstance(request, NormalizedSize):
        return request

    if isinstance(request, str):
        if presets and request in presets:
            return normalize_spec(presets[request], size_name=request)
        return parse_dimension_string(request)

    if isinstance(request, SizeSpec):
        return normalize_spec(request)

    if isinstance(request, Mapping):
        try:
            spec = SizeSpec.model_validate(dict(request))
        except ValidationError as exc:
            raise InvalidRequest(f"Invalid size request: {exc}") from exc
        return normalize_spec(spec)

    raise InvalidRequest(f"Unsupported size request type: {type(request).__name__}")
