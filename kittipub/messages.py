"""Message types produced from a KITTI raw recording."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np


@dataclass
class Header:
    """Frame and time stamp of a message."""

    frame_id: str = "base_link"
    stamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Quaternion:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


def quaternion_from_rpy(roll: float, pitch: float, yaw: float) -> Quaternion:
    """Build a quaternion from fixed-axis roll, pitch and yaw in radians."""
    cr, sr = math.cos(roll * 0.5), math.sin(roll * 0.5)
    cp, sp = math.cos(pitch * 0.5), math.sin(pitch * 0.5)
    cy, sy = math.cos(yaw * 0.5), math.sin(yaw * 0.5)
    return Quaternion(
        x=sr * cp * cy - cr * sp * sy,
        y=cr * sp * cy + sr * cp * sy,
        z=cr * cp * sy - sr * sp * cy,
        w=cr * cp * cy + sr * sp * sy,
    )


@dataclass
class NavSatFix:
    """A satellite navigation fix."""

    SERVICE_GPS: ClassVar[int] = 1
    STATUS_GBAS_FIX: ClassVar[int] = 2
    COVARIANCE_TYPE_UNKNOWN: ClassVar[int] = 0
    COVARIANCE_TYPE_APPROXIMATED: ClassVar[int] = 1

    header: Header = field(default_factory=Header)
    service: int = SERVICE_GPS
    status: int = STATUS_GBAS_FIX
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0
    position_covariance: list[float] = field(default_factory=lambda: [0.0] * 9)
    position_covariance_type: int = COVARIANCE_TYPE_UNKNOWN

    def __post_init__(self) -> None:
        if len(self.position_covariance) != 9:
            raise ValueError("position_covariance must hold 9 values")


@dataclass
class Imu:
    """Orientation, angular velocity and linear acceleration."""

    header: Header = field(default_factory=Header)
    orientation: Quaternion = field(default_factory=Quaternion)
    angular_velocity: Vector3 = field(default_factory=Vector3)
    linear_acceleration: Vector3 = field(default_factory=Vector3)


@dataclass
class Marker:
    """A visualisation marker."""

    CYLINDER: ClassVar[int] = 3
    ADD: ClassVar[int] = 0

    header: Header = field(default_factory=Header)
    ns: str = ""
    id: int = 0
    type: int = 0
    action: int = ADD
    position: Vector3 = field(default_factory=Vector3)
    orientation: Quaternion = field(default_factory=Quaternion)
    scale: Vector3 = field(default_factory=Vector3)
    color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)


@dataclass
class MarkerArray:
    markers: list[Marker] = field(default_factory=list)


@dataclass
class Image:
    """A raw image with rows of ``step`` bytes."""

    header: Header = field(default_factory=Header)
    height: int = 0
    width: int = 0
    encoding: str = ""
    is_bigendian: bool = False
    step: int = 0
    data: bytes = b""

    def __post_init__(self) -> None:
        if len(self.data) != self.step * self.height:
            raise ValueError(
                f"image data holds {len(self.data)} bytes, expected {self.step * self.height}"
            )


@dataclass(eq=False)
class PointCloud:
    """An unordered cloud of x, y, z, intensity points stored as float32."""

    FIELDS: ClassVar[tuple[str, ...]] = ("x", "y", "z", "intensity")
    POINT_STEP: ClassVar[int] = 16

    header: Header = field(default_factory=Header)
    points: np.ndarray = field(default_factory=lambda: np.zeros((0, 4), dtype=np.float32))

    def __post_init__(self) -> None:
        arr = np.asarray(self.points, dtype=np.float32)
        if arr.size == 0:
            arr = arr.reshape(0, 4)
        if arr.ndim != 2 or arr.shape[1] != 4:
            raise ValueError("points must have shape (N, 4)")
        self.points = arr

    def __len__(self) -> int:
        return int(self.points.shape[0])

    @property
    def height(self) -> int:
        return 1

    @property
    def width(self) -> int:
        return len(self)

    @property
    def row_step(self) -> int:
        return self.POINT_STEP * self.width

    def to_bytes(self) -> bytes:
        """The points as packed little-endian float32 records."""
        return self.points.astype("<f4").tobytes()