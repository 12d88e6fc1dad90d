"""Replay KITTI raw recordings as sensor messages, with WGS84 projection helpers."""

__version__ = "0.1.0"