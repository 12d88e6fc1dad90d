"""Loading Velodyne point clouds and camera images of a KITTI recording."""

from __future__ import annotations

import os

import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from kittipub.messages import Header, Image, PointCloud

_POINT_BYTES = 16

_ENCODINGS = {
    (1, np.dtype(np.uint8)): "mono8",
    (3, np.dtype(np.uint8)): "bgr8",
    (1, np.dtype(np.int16)): "mono16",
    (4, np.dtype(np.uint8)): "rgba8",
}


def _header(stamp: float | None) -> Header:
    return Header() if stamp is None else Header(stamp=stamp)


def read_point_cloud(path: str | os.PathLike[str], stamp: float | None = None) -> PointCloud:
    """Read a Velodyne scan of little-endian float32 x, y, z, intensity records.

    A trailing incomplete record is ignored.
    """
    with open(path, "rb") as handle:
        data = handle.read()
    count = len(data) // _POINT_BYTES
    points = np.frombuffer(data[: count * _POINT_BYTES], dtype="<f4").reshape(count, 4)
    return PointCloud(header=_header(stamp), points=points)


def encoding_for(channels: int, dtype) -> str:
    """Name the pixel encoding of an image with the given channels and element type."""
    try:
        return _ENCODINGS[(channels, np.dtype(dtype))]
    except KeyError:
        raise ValueError("Unsupported encoding type") from None


def load_image(path: str | os.PathLike[str], stamp: float | None = None) -> Image:
    """Load an image file as an 8-bit three-channel BGR image message."""
    try:
        with PILImage.open(path) as picture:
            rgb = np.asarray(picture.convert("RGB"), dtype=np.uint8)
    except UnidentifiedImageError as exc:
        raise ValueError(f"cannot read image {os.fspath(path)!r}") from exc
    bgr = np.ascontiguousarray(rgb[:, :, ::-1])
    height, width, channels = bgr.shape
    return Image(
        header=_header(stamp),
        height=height,
        width=width,
        encoding=encoding_for(channels, bgr.dtype),
        is_bigendian=False,
        step=width * channels,
        data=bgr.tobytes(),
    )