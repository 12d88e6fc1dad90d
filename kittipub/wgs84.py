"""Conversions between WGS84 coordinates and planar metric coordinates."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Sequence

_DEG_TO_RAD = math.pi / 180.0
_HALF_PI = math.pi / 2.0
_EPSILON10 = 1.0e-10
_EPSILON12 = 1.0e-12

_EQUATOR_RADIUS = 6378137.0
_FLATTENING = 1.0 / 298.257223563
_SQUARED_ECCENTRICITY = 2.0 * _FLATTENING - _FLATTENING * _FLATTENING

_C00 = 1.0
_C02 = 0.25
_C04 = 0.046875
_C06 = 0.01953125
_C08 = 0.01068115234375
_C22 = 0.75
_C44 = 0.46875
_C46 = 0.01302083333333333333
_C48 = 0.00712076822916666666
_C66 = 0.36458333333333333333
_C68 = 0.00569661458333333333
_C88 = 0.3076171875

_ES = _SQUARED_ECCENTRICITY
_R0 = _C00 - _ES * (_C02 + _ES * (_C04 + _ES * (_C06 + _ES * _C08)))
_R1 = _ES * (_C22 - _ES * (_C04 + _ES * (_C06 + _ES * _C08)))
_R2T = _ES * _ES
_R2 = _R2T * (_C44 - _ES * (_C46 + _ES * _C48))
_R3T = _R2T * _ES
_R3 = _R3T * (_C66 - _ES * _C68)
_R4 = _R3T * _ES * _C88


@dataclass(frozen=True)
class Xy:
    """A planar position in metres."""

    x: float
    y: float


def _mlfn(lat: float) -> float:
    sin_phi = math.sin(lat)
    cos_phi = math.cos(lat) * sin_phi
    sq = sin_phi * sin_phi
    return _R0 * lat - cos_phi * (_R1 + sq * (_R2 + sq * (_R3 + sq * _R4)))


def _msfn(sin_phi: float, cos_phi: float, es: float) -> float:
    return cos_phi / math.sqrt(1.0 - es * sin_phi * sin_phi)


def to_cartesian(
    reference: Sequence[float], position: Sequence[float]
) -> tuple[float, float]:
    """Project a WGS84 (lat, lon) position onto a plane around a WGS84 reference.

    Returns (x, y) in metres, x pointing east and y pointing north.
    """
    ref_lat, ref_lon = reference
    ml0 = _mlfn(ref_lat * _DEG_TO_RAD)

    lat = position[0] * _DEG_TO_RAD
    lon = position[1] * _DEG_TO_RAD

    d = abs(lat) - _HALF_PI
    if d > _EPSILON12 or abs(lon) > 10.0:
        return (0.0, 0.0)
    if abs(d) < _EPSILON12:
        lat = -_HALF_PI if lat < 0.0 else _HALF_PI
    lon -= ref_lon * _DEG_TO_RAD

    x, y = lon, -ml0
    if not abs(lat) < _EPSILON10:
        sin_lat = math.sin(lat)
        ms = (
            _msfn(sin_lat, math.cos(lat), _SQUARED_ECCENTRICITY) / sin_lat
            if abs(sin_lat) > _EPSILON10
            else 0.0
        )
        lon *= sin_lat
        x = ms * math.sin(lon)
        y = (_mlfn(lat) - ml0) + ms * (1.0 - math.cos(lon))
    return (_EQUATOR_RADIUS * x, _EQUATOR_RADIUS * y)


def from_cartesian(
    reference: Sequence[float], cartesian_position: Sequence[float]
) -> tuple[float, float]:
    """Approximate the WGS84 (lat, lon) of a planar position around a reference.

    The latitude and then the longitude are stepped from the reference until
    the projected position stops getting closer to the target.
    """
    tolerance = 1.0e-2
    increment = 1e-5
    target_x, target_y = cartesian_position
    sign_lon = -1 if target_x < 0 else 1
    sign_lat = -1 if target_y < 0 else 1

    lat, lon = float(reference[0]), float(reference[1])
    result = to_cartesian(reference, (lat, lon))

    previous = sys.float_info.max
    distance = abs(target_y - result[1])
    while previous > distance > tolerance:
        lat += sign_lat * increment
        result = to_cartesian(reference, (lat, lon))
        previous, distance = distance, abs(target_y - result[1])

    previous = sys.float_info.max
    distance = abs(target_x - result[0])
    while previous > distance > tolerance:
        lon += sign_lon * increment
        result = to_cartesian(reference, (lat, lon))
        previous, distance = distance, abs(target_x - result[0])

    return (lat, lon)


def latlon_to_utm(lat: float, lon: float) -> Xy:
    """Convert a WGS84 latitude/longitude in degrees to UTM easting and northing."""
    a = 6378137.0
    f = 1.0 / 298.2572236
    b = a * (1.0 - f)
    e = math.sqrt(1.0 - (b**2) / (a**2))
    k0 = 0.9996
    drad = math.pi / 180.0

    phi = lat * drad
    zone = 1.0 + math.floor((lon + 180.0) / 6.0)
    central_meridian = 3.0 + 6.0 * (zone - 1.0) - 180.0
    esq = 1.0 - (b / a) * (b / a)
    e0sq = e * e / (1.0 - e * e)
    m0 = 0.0
    n = a / math.sqrt(1.0 - (e * math.sin(phi)) ** 2)
    t = math.tan(phi) ** 2
    c = e0sq * math.cos(phi) ** 2
    big_a = (lon - central_meridian) * drad * math.cos(phi)

    m = phi * (1.0 - esq * (1.0 / 4.0 + esq * (3.0 / 64.0 + 5.0 * esq / 256.0)))
    m -= math.sin(2.0 * phi) * (esq * (3.0 / 8.0 + esq * (3.0 / 32.0 + 45.0 * esq / 1024.0)))
    m += math.sin(4.0 * phi) * (esq * esq * (15.0 / 256.0 + esq * 45.0 / 1024.0))
    m -= math.sin(6.0 * phi) * (esq * esq * esq * (35.0 / 3072.0))
    m *= a

    a2 = big_a * big_a
    x = k0 * n * big_a * (
        1.0
        + a2 * ((1.0 - t + c) / 6.0 + a2 * (5.0 - 18.0 * t + t * t + 72.0 * c - 58.0 * e0sq) / 120.0)
    )
    x += 500000.0

    y = k0 * (
        m
        - m0
        + n
        * math.tan(phi)
        * (
            a2
            * (
                1.0 / 2.0
                + a2
                * (
                    (5.0 - t + 9.0 * c + 4.0 * c * c) / 24.0
                    + a2 * (61.0 - 58.0 * t + t * t + 600.0 * c - 330.0 * e0sq) / 720.0
                )
            )
        )
    )
    if y < 0:
        y += 10000000.0
    return Xy(x, y)