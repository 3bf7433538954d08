"""Shrink and re-encode photos before they are stored inline."""

import base64
import io

from PIL import Image, ImageOps, UnidentifiedImageError

from rosarium.config import PHOTO_JPEG_QUALITY, PHOTO_MAX_DIMENSION
from rosarium.exceptions import PhotoError

DATA_URI_PREFIX = "data:image/jpeg;base64,"


def fit_within(width: int, height: int, limit: int = PHOTO_MAX_DIMENSION) -> tuple[int, int]:
    """Scale (width, height) so the longer side is at most ``limit``, keeping aspect ratio."""
    longer = max(width, height)
    if longer <= limit:
        return width, height
    scale = limit / longer
    return max(1, round(width * scale)), max(1, round(height * scale))


def encode_photo(
    data: bytes,
    *,
    max_dimension: int = PHOTO_MAX_DIMENSION,
    quality: int = PHOTO_JPEG_QUALITY,
) -> str:
    """Turn raw image bytes into a bounded JPEG data URI.

    Raises:
        PhotoError: The bytes are not an image Pillow can read.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            oriented = ImageOps.exif_transpose(img)
            rgb = oriented.convert("RGB")
    except (UnidentifiedImageError, OSError) as e:
        msg = "Invalid image file."
        raise PhotoError(msg) from e

    size = fit_within(rgb.width, rgb.height, max_dimension)
    if size != rgb.size:
        rgb = rgb.resize(size, Image.Resampling.LANCZOS)

    out = io.BytesIO()
    rgb.save(out, format="JPEG", quality=quality)
    return DATA_URI_PREFIX + base64.b64encode(out.getvalue()).decode("ascii")


def decode_data_uri(url: str) -> bytes:
    """Inverse of encode_photo() for exporting a stored photo back to a file."""
    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        msg = "Not a base64 data URI"
        raise PhotoError(msg)
    try:
        return base64.b64decode(payload, validate=True)
    except ValueError as e:
        msg = "Corrupt photo data"
        raise PhotoError(msg) from e
