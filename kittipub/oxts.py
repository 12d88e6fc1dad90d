"""Reading OXTS (GPS/IMU) records and turning them into navigation messages."""

from __future__ import annotations

import os
import re
from typing import Sequence

from kittipub.messages import (
    Header,
    Imu,
    Marker,
    MarkerArray,
    NavSatFix,
    Quaternion,
    Vector3,
    quaternion_from_rpy,
)
from kittipub.wgs84 import to_cartesian

_NUMBER = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_NAVSATFIX_FIELDS = 24
_IMU_FIELDS = 14
_MARKER_FIELDS = 2


def _header(stamp: float | None) -> Header:
    return Header() if stamp is None else Header(stamp=stamp)


def _leading_number(token: str) -> float | None:
    match = _NUMBER.match(token)
    return float(match.group(1)) if match else None


def _atof(token: str) -> float:
    """Parse the leading number of a token, or 0.0 if it has none."""
    value = _leading_number(token)
    return 0.0 if value is None else value


def _stod(token: str) -> float:
    """Parse the leading number of a token, raising if it has none."""
    value = _leading_number(token)
    if value is None:
        raise ValueError(f"not a number: {token!r}")
    return value


def _require(tokens: Sequence[str], count: int) -> None:
    if len(tokens) < count:
        raise ValueError(
            f"OXTS record holds {len(tokens)} fields, at least {count} are needed"
        )


def parse_oxts_file(path: str | os.PathLike[str], delimiter: str = " ") -> list[str]:
    """Split the content of an OXTS file into tokens.

    Every character of ``delimiter`` separates tokens. Consecutive separators
    give empty tokens; a single separator at the very end gives none.
    """
    with open(path, encoding="utf-8") as handle:
        content = handle.read()
    if not content:
        return []
    if not delimiter:
        return [content]
    if content[-1] in delimiter:
        content = content[:-1]
    return re.split(f"[{re.escape(delimiter)}]", content)


def navsatfix_from_oxts(tokens: Sequence[str], stamp: float | None = None) -> NavSatFix:
    """Build a satellite fix from latitude, longitude, altitude and position accuracy."""
    _require(tokens, _NAVSATFIX_FIELDS)
    accuracy = _atof(tokens[23])
    return NavSatFix(
        header=_header(stamp),
        service=NavSatFix.SERVICE_GPS,
        status=NavSatFix.STATUS_GBAS_FIX,
        latitude=_atof(tokens[0]),
        longitude=_atof(tokens[1]),
        altitude=_atof(tokens[2]),
        position_covariance=[
            accuracy, 0.0, 0.0,
            0.0, accuracy, 0.0,
            0.0, 0.0, accuracy,
        ],
        position_covariance_type=NavSatFix.COVARIANCE_TYPE_APPROXIMATED,
    )


def imu_from_oxts(tokens: Sequence[str], stamp: float | None = None) -> Imu:
    """Build an IMU message from orientation, rates and accelerations of a record."""
    _require(tokens, _IMU_FIELDS)
    roll, pitch, yaw = (_atof(token) for token in tokens[3:6])
    return Imu(
        header=_header(stamp),
        orientation=quaternion_from_rpy(roll, pitch, yaw),
        angular_velocity=Vector3(*(_atof(token) for token in tokens[8:11])),
        linear_acceleration=Vector3(*(_atof(token) for token in tokens[11:14])),
    )


def marker_array_from_oxts(
    tokens: Sequence[str], stamp: float | None = None, marker_id: int = 1
) -> MarkerArray:
    """Build a marker array holding one cylinder at the record's GPS position."""
    _require(tokens, _MARKER_FIELDS)
    lat = _stod(tokens[0])
    lon = _stod(tokens[1])
    x, y = to_cartesian((lat, lon), (lat, lon))
    marker = Marker(
        header=_header(stamp),
        ns="RTK_MARKER",
        id=marker_id,
        type=Marker.CYLINDER,
        action=Marker.ADD,
        position=Vector3(x, y, 0.0),
        orientation=Quaternion(w=1.0),
        scale=Vector3(0.5, 0.5, 3.5),
        color=(0.0, 0.0, 1.0, 0.8),
    )
    return MarkerArray(markers=[marker])