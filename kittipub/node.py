"""A node that replays a KITTI raw recording as a stream of messages."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Sequence

from kittipub.oxts import (
    imu_from_oxts,
    marker_array_from_oxts,
    navsatfix_from_oxts,
    parse_oxts_file,
)
from kittipub.sensors import load_image, read_point_cloud

logger = logging.getLogger(__name__)

TOPIC_POINT_CLOUD = "kitti/point_cloud"
TOPIC_IMAGE_GRAY_LEFT = "kitti/image/gray/left"
TOPIC_IMAGE_GRAY_RIGHT = "kitti/image/gray/right"
TOPIC_IMAGE_COLOR_LEFT = "kitti/image/color/left"
TOPIC_IMAGE_COLOR_RIGHT = "kitti/image/color/right"
TOPIC_IMU = "kitti/imu"
TOPIC_NAV_SAT_FIX = "kitti/nav_sat_fix"
TOPIC_MARKER_ARRAY = "kitti/marker_array"

Publish = Callable[[str, Any], None]


class PublisherType(Enum):
    """The data streams of a KITTI raw recording."""

    POINT_CLOUD = 0
    IMAGE_LEFT_GRAY = 1
    IMAGE_RIGHT_GRAY = 2
    IMAGE_LEFT_COLOR = 3
    IMAGE_RIGHT_COLOR = 4
    ODOMETRY = 5


_SUBDIRECTORIES = {
    PublisherType.POINT_CLOUD: "velodyne_points/data",
    PublisherType.IMAGE_LEFT_GRAY: "image_00/data",
    PublisherType.IMAGE_RIGHT_GRAY: "image_01/data",
    PublisherType.IMAGE_LEFT_COLOR: "image_02/data",
    PublisherType.IMAGE_RIGHT_COLOR: "image_03/data",
    PublisherType.ODOMETRY: "oxts/data",
}


def _print_message(topic: str, message: Any) -> None:
    print(f"{topic}: {type(message).__name__}", flush=True)


class KittiPublishersNode:
    """Publishes one frame of every KITTI stream per timer tick."""

    def __init__(
        self,
        prefix: str | Path,
        date: str,
        dataset: str,
        publish: Publish | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._publish = publish or _print_message
        self._clock = clock
        self.file_index = 0
        self._marker_id = 1

        root = Path(prefix) / date / dataset
        logger.info("Loading data at: %s", root)
        self._paths = {kind: root / sub for kind, sub in _SUBDIRECTORIES.items()}
        self._file_names: dict[PublisherType, list[str]] = {
            kind: [] for kind in PublisherType
        }
        self._collect_file_names()

    def _collect_file_names(self) -> None:
        for kind in PublisherType:
            try:
                names = sorted(
                    entry.name for entry in self.get_path(kind).iterdir() if entry.is_file()
                )
            except OSError:
                logger.error("File path not found.")
                continue
            self.set_filenames(kind, names)

    def get_path(self, publisher_type: PublisherType) -> Path:
        """The directory holding the files of a stream."""
        return self._paths[publisher_type]

    def get_filenames(self, publisher_type: PublisherType) -> list[str]:
        """The sorted file names of a stream."""
        return list(self._file_names[publisher_type])

    def set_filenames(self, publisher_type: PublisherType, file_names: Sequence[str]) -> None:
        """Replace the file names of a stream."""
        self._file_names[publisher_type] = list(file_names)

    def _file(self, publisher_type: PublisherType, names_of: PublisherType) -> Path:
        return self.get_path(publisher_type) / self._file_names[names_of][self.file_index]

    def on_timer(self) -> bool:
        """Publish the next frame; return False once every frame has been published."""
        if self.file_index >= len(self._file_names[PublisherType.IMAGE_LEFT_COLOR]):
            logger.info("No more data: all messages have been published.")
            return False

        logger.info("Publishing message %d", self.file_index)
        stamp = self._clock()

        cloud = read_point_cloud(
            self._file(PublisherType.POINT_CLOUD, PublisherType.POINT_CLOUD), stamp
        )
        gray_left = load_image(
            self._file(PublisherType.IMAGE_LEFT_GRAY, PublisherType.IMAGE_LEFT_COLOR), stamp
        )
        gray_right = load_image(
            self._file(PublisherType.IMAGE_RIGHT_GRAY, PublisherType.IMAGE_RIGHT_COLOR), stamp
        )
        color_left = load_image(
            self._file(PublisherType.IMAGE_LEFT_COLOR, PublisherType.IMAGE_LEFT_COLOR), stamp
        )
        color_right = load_image(
            self._file(PublisherType.IMAGE_RIGHT_COLOR, PublisherType.IMAGE_RIGHT_COLOR), stamp
        )

        tokens = parse_oxts_file(
            self._file(PublisherType.ODOMETRY, PublisherType.ODOMETRY), " "
        )
        nav_sat_fix = navsatfix_from_oxts(tokens, stamp)
        imu = imu_from_oxts(tokens, stamp)
        markers = marker_array_from_oxts(tokens, stamp, self._marker_id)
        self._marker_id += 1

        for topic, message in (
            (TOPIC_POINT_CLOUD, cloud),
            (TOPIC_IMAGE_GRAY_LEFT, gray_left),
            (TOPIC_IMAGE_GRAY_RIGHT, gray_right),
            (TOPIC_IMAGE_COLOR_LEFT, color_left),
            (TOPIC_IMAGE_COLOR_RIGHT, color_right),
            (TOPIC_IMU, imu),
            (TOPIC_NAV_SAT_FIX, nav_sat_fix),
            (TOPIC_MARKER_ARRAY, markers),
        ):
            self._publish(topic, message)

        self.file_index += 1
        return True

    def spin(self, period: float = 0.1, max_ticks: int | None = None) -> int:
        """Call on_timer every ``period`` seconds, forever or for ``max_ticks`` ticks.

        Returns the number of frames published.
        """
        published = 0
        ticks = 0
        next_tick = time.monotonic() + period
        while max_ticks is None or ticks < max_ticks:
            delay = next_tick - time.monotonic()
            if delay > 0:
                time.sleep(delay)
            next_tick += period
            if self.on_timer():
                published += 1
            ticks += 1
        return published


def main(argv: Sequence[str] | None = None) -> int:
    """Replay a KITTI raw recording, printing each published message."""
    parser = argparse.ArgumentParser(description="Replay a KITTI raw recording.")
    parser.add_argument("--kitti-prefix", required=True)
    parser.add_argument("--kitti-date", required=True)
    parser.add_argument("--kitti-dataset", required=True)
    parser.add_argument("--period", type=float, default=0.1)
    parser.add_argument("--max-ticks", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, stream=sys.stdout)
    node = KittiPublishersNode(args.kitti_prefix, args.kitti_date, args.kitti_dataset)
    try:
        node.spin(args.period, args.max_ticks)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())