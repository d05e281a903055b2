"""
Image preparation before upload.

"camera" photos are recompressed to JPEG. "gallery" picks are first cropped to
4:3 around the centre, the way the picker's edit step frames them. Both are
downscaled so neither side exceeds max_dimension.
"""

import io
from typing import Tuple

from PIL import Image, ImageOps

SOURCES = ("camera", "gallery")
GALLERY_ASPECT: Tuple[int, int] = (4, 3)


class ImagePreparationError(Exception):
    """The file could not be read or encoded as an image."""


def crop_to_aspect(img: Image.Image, aspect: Tuple[int, int] = GALLERY_ASPECT) -> Image.Image:
    """Return the largest centred crop of img with the given width:height ratio."""
    width, height = img.size
    ratio = aspect[0] / aspect[1]
    if width / height > ratio:
        new_width = max(1, round(height * ratio))
        left = (width - new_width) // 2
        return img.crop((left, 0, left + new_width, height))
    new_height = max(1, round(width / ratio))
    top = (height - new_height) // 2
    return img.crop((0, top, width, top + new_height))


# PUBLIC_INTERFACE
def prepare_image(path: str, source: str = "gallery", quality: int = 70, max_dimension: int = 1280) -> bytes:
    """Load, frame, downscale and JPEG-encode the image at path.

    Raises:
        ValueError: unknown source.
        ImagePreparationError: the file is missing or not a readable image.
    """
    if source not in SOURCES:
        raise ValueError(f"Unknown image source: {source!r}")
    try:
        with Image.open(path) as original:
            img = ImageOps.exif_transpose(original)
            if source == "gallery":
                img = crop_to_aspect(img)
            img.thumbnail((max_dimension, max_dimension))
            if img.mode not in ("RGB", "L"):
                img = img.convert("RGB")
            buf = io.BytesIO()
            img.save(buf, format="JPEG", quality=quality)
            return buf.getvalue()
    except OSError as exc:
        raise ImagePreparationError(f"Cannot prepare image {path}: {exc}") from exc
