import logging

import numpy as np
import pytest
from PIL import Image as PILImage

from kittipub.messages import Image, Imu, MarkerArray, NavSatFix, PointCloud
from kittipub.node import KittiPublishersNode, PublisherType, main

PREFIX_DATE = "2011_09_26"
DATASET = "drive_0001_sync"
SUBDIRS = [
    "velodyne_points/data",
    "image_00/data",
    "image_01/data",
    "image_02/data",
    "image_03/data",
    "oxts/data",
]


def _oxts_line(lat: float, lon: float) -> str:
    values = [lat, lon, 100.0] + [0.0] * 20 + [0.5] + [0.0] * 6
    return " ".join(str(v) for v in values) + "\n"


def _make_dataset(root, frames=2):
    base = root / PREFIX_DATE / DATASET
    for sub in SUBDIRS:
        (base / sub).mkdir(parents=True)
    for i in reversed(range(frames)):
        stem = f"{i:010d}"
        points = np.arange(8, dtype="<f4").reshape(2, 4) + i
        (base / "velodyne_points/data" / f"{stem}.bin").write_bytes(points.tobytes())
        for cam in ("image_00", "image_01", "image_02", "image_03"):
            PILImage.new("RGB", (4, 3), (10, 20, 30)).save(base / cam / "data" / f"{stem}.png")
        (base / "oxts/data" / f"{stem}.txt").write_text(_oxts_line(49.0 + i, 8.4))
    return base


@pytest.fixture
def dataset(tmp_path):
    return _make_dataset(tmp_path)


def _node(tmp_path, sink):
    return KittiPublishersNode(
        tmp_path, PREFIX_DATE, DATASET, publish=lambda t, m: sink.append((t, m)), clock=lambda: 5.0
    )


def test_paths_follow_kitti_layout(tmp_path, dataset):
    node = _node(tmp_path, [])
    assert node.get_path(PublisherType.POINT_CLOUD) == dataset / "velodyne_points" / "data"
    assert node.get_path(PublisherType.IMAGE_LEFT_GRAY) == dataset / "image_00" / "data"
    assert node.get_path(PublisherType.IMAGE_RIGHT_COLOR) == dataset / "image_03" / "data"
    assert node.get_path(PublisherType.ODOMETRY) == dataset / "oxts" / "data"


def test_filenames_are_sorted(tmp_path, dataset):
    node = _node(tmp_path, [])
    assert node.get_filenames(PublisherType.POINT_CLOUD) == ["0000000000.bin", "0000000001.bin"]
    assert node.get_filenames(PublisherType.ODOMETRY) == ["0000000000.txt", "0000000001.txt"]


def test_set_filenames_round_trip(tmp_path, dataset):
    node = _node(tmp_path, [])
    node.set_filenames(PublisherType.IMAGE_LEFT_COLOR, ["a.png"])
    assert node.get_filenames(PublisherType.IMAGE_LEFT_COLOR) == ["a.png"]
    returned = node.get_filenames(PublisherType.IMAGE_LEFT_COLOR)
    returned.append("b.png")
    assert node.get_filenames(PublisherType.IMAGE_LEFT_COLOR) == ["a.png"]


def test_missing_directories_give_empty_lists(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        node = _node(tmp_path, [])
    assert all(node.get_filenames(kind) == [] for kind in PublisherType)
    assert "File path not found." in caplog.text
    assert node.on_timer() is False


def test_on_timer_publishes_all_topics_in_order(tmp_path, dataset):
    sink = []
    node = _node(tmp_path, sink)
    assert node.on_timer() is True
    assert [t for t, _ in sink] == [
        "kitti/point_cloud",
        "kitti/image/gray/left",
        "kitti/image/gray/right",
        "kitti/image/color/left",
        "kitti/image/color/right",
        "kitti/imu",
        "kitti/nav_sat_fix",
        "kitti/marker_array",
    ]
    messages = dict(sink)
    assert isinstance(messages["kitti/point_cloud"], PointCloud)
    assert len(messages["kitti/point_cloud"]) == 2
    assert isinstance(messages["kitti/image/color/left"], Image)
    assert messages["kitti/image/color/left"].encoding == "bgr8"
    assert isinstance(messages["kitti/imu"], Imu)
    fix = messages["kitti/nav_sat_fix"]
    assert isinstance(fix, NavSatFix)
    assert fix.latitude == pytest.approx(49.0)
    assert fix.header.stamp == 5.0
    assert isinstance(messages["kitti/marker_array"], MarkerArray)
    assert node.file_index == 1


def test_frames_advance_and_then_stop(tmp_path, dataset):
    sink = []
    node = _node(tmp_path, sink)
    assert node.on_timer() is True
    assert node.on_timer() is True
    assert node.on_timer() is False
    assert node.file_index == 2
    fixes = [m for t, m in sink if t == "kitti/nav_sat_fix"]
    assert [f.latitude for f in fixes] == pytest.approx([49.0, 50.0])
    ids = [m.markers[0].id for t, m in sink if t == "kitti/marker_array"]
    assert ids == [1, 2]


def test_missing_point_cloud_raises(tmp_path, dataset):
    node = _node(tmp_path, [])
    (dataset / "velodyne_points/data/0000000000.bin").unlink()
    with pytest.raises(FileNotFoundError):
        node.on_timer()


def test_spin_counts_published_frames(tmp_path, dataset):
    sink = []
    node = _node(tmp_path, sink)
    assert node.spin(period=0.0, max_ticks=4) == 2
    assert len(sink) == 16


def test_main_replays_dataset(tmp_path, dataset, capsys):
    code = main(
        [
            "--kitti-prefix", str(tmp_path),
            "--kitti-date", PREFIX_DATE,
            "--kitti-dataset", DATASET,
            "--period", "0",
            "--max-ticks", "1",
        ]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert "kitti/point_cloud: PointCloud" in out
    assert "kitti/marker_array: MarkerArray" in out


def test_main_requires_dataset_arguments():
    with pytest.raises(SystemExit):
        main([])