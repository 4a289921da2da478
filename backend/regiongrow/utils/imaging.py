"""Image decoding — raster files to RGB numpy arrays, plus per-pixel band lookup."""

from __future__ import annotations

import base64
import binascii
import io
from pathlib import Path
from typing import BinaryIO, Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from regiongrow.errors import ImageDecodeError, ImageTooSmallError, InvalidDepthError

ImageSource = Union[str, Path, bytes, BinaryIO]


def load_image(source: ImageSource) -> NDArray[np.uint8]:
    """Decode any Pillow-readable raster (PNG, TIFF, ...) to an H x W x 3 RGB array.

    Alpha is dropped and palette/greyscale modes are expanded to RGB.
    """
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    try:
        with Image.open(source) as img:
            return np.array(img.convert("RGB"))
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e


def decode_base64_image(data: str) -> NDArray[np.uint8]:
    """Decode a base64 image payload (optionally a ``data:`` URL)."""
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image payload: {e}") from e
    return load_image(raw)


def encode_png_base64(image: NDArray[np.uint8]) -> str:
    buf = io.BytesIO()
    Image.fromarray(np.asarray(image, dtype=np.uint8)).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


def get_colour_bands(image: NDArray, coord: tuple[int, int]) -> tuple[int, ...]:
    """Colour bands of pixel (x, y). Row is y, column is x.

    A 2-D greyscale array is read as three equal bands.
    """
    x, y = coord
    if image.ndim == 2:
        v = int(image[y, x])
        return (v, v, v)
    return tuple(int(v) for v in image[y, x, :3])


def check_block(image: NDArray, n: int) -> None:
    """Raise unless the image can hold the top-left 2^n x 2^n block."""
    if n < 0:
        raise InvalidDepthError(n)
    h, w = image.shape[:2]
    side = 1 << n
    if w < side or h < side:
        raise ImageTooSmallError(w, h, n)
