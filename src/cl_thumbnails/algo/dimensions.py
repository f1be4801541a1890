"""Pure resize-dimension computation.

Decides the source box and output size of a resize before any pixels are
touched, so the output file name can be derived ahead of the resize.
"""

import math

from ..common.schemas import CropSpec, ResizeBox


def constrain_dimensions(
    current_w: int,
    current_h: int,
    max_w: int = 0,
    max_h: int = 0,
) -> tuple[int, int]:
    """
    Scale (current_w, current_h) down to fit within (max_w, max_h).

    A max of 0 leaves that axis unconstrained. The aspect ratio is kept and
    images are never scaled up.
    """
    if not max_w and not max_h:
        return current_w, current_h

    width_ratio = height_ratio = 1.0
    did_width = did_height = False

    if max_w > 0 and current_w > 0 and current_w > max_w:
        width_ratio = max_w / current_w
        did_width = True

    if max_h > 0 and current_h > 0 and current_h > max_h:
        height_ratio = max_h / current_h
        did_height = True

    smaller_ratio = min(width_ratio, height_ratio)
    larger_ratio = max(width_ratio, height_ratio)

    if (
        int(round(current_w * larger_ratio)) > max_w > 0
        or int(round(current_h * larger_ratio)) > max_h > 0
    ):
        ratio = smaller_ratio
    else:
        ratio = larger_ratio

    w = max(1, int(round(current_w * ratio)))
    h = max(1, int(round(current_h * ratio)))

    # Rounding may leave the constrained axis one pixel off target
    if did_width and w == max_w - 1:
        w = max_w
    if did_height and h == max_h - 1:
        h = max_h

    return w, h


def _anchor(crop: CropSpec) -> tuple[str, str]:
    if isinstance(crop, tuple) and len(crop) == 2:
        return crop
    return ("center", "center")


def _start(anchor: str, low: str, high: str, orig: int, cropped: int) -> int:
    if anchor == low:
        return 0
    if anchor == high:
        return orig - cropped
    return math.floor((orig - cropped) / 2)


def resize_dimensions(
    orig_w: int,
    orig_h: int,
    dest_w: int,
    dest_h: int,
    crop: CropSpec = False,
) -> ResizeBox | None:
    """
    Compute the box of a resize of an orig_w x orig_h image to dest_w x dest_h.

    Args:
        orig_w: Source width
        orig_h: Source height
        dest_w: Target width (0 = derive from aspect ratio)
        dest_h: Target height (0 = derive from aspect ratio)
        crop: False scales to fit; True crops to fill around the center; an
              anchor pair ("left", "top") crops to fill around that anchor.
              Any other truthy value crops around the center.

    Returns:
        ResizeBox, or None if the image cannot be made smaller than it is.
    """
    if orig_w <= 0 or orig_h <= 0:
        return None
    if dest_w <= 0 and dest_h <= 0:
        return None

    if crop:
        aspect_ratio = orig_w / orig_h
        new_w = min(dest_w, orig_w)
        new_h = min(dest_h, orig_h)

        if not new_w:
            new_w = int(round(new_h * aspect_ratio))
        if not new_h:
            new_h = int(round(new_w / aspect_ratio))

        size_ratio = max(new_w / orig_w, new_h / orig_h)
        crop_w = int(round(new_w / size_ratio))
        crop_h = int(round(new_h / size_ratio))

        horiz, vert = _anchor(crop)
        s_x = _start(horiz, "left", "right", orig_w, crop_w)
        s_y = _start(vert, "top", "bottom", orig_h, crop_h)
    else:
        crop_w, crop_h = orig_w, orig_h
        s_x = s_y = 0
        new_w, new_h = constrain_dimensions(orig_w, orig_h, dest_w, dest_h)

    if new_w >= orig_w and new_h >= orig_h:
        return None

    return ResizeBox(
        dst_x=0,
        dst_y=0,
        src_x=int(s_x),
        src_y=int(s_y),
        dst_w=int(new_w),
        dst_h=int(new_h),
        src_w=crop_w,
        src_h=crop_h,
    )
