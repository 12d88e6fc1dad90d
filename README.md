# kittipub

`kittipub` replays a recording from the KITTI raw dataset as a stream of
sensor messages, one frame per timer tick (every 0.1 s by default). For every
frame it produces:

- a `PointCloud` read from the Velodyne binary scan (`x, y, z, intensity` as
  little-endian 32-bit floats; a trailing incomplete record is ignored),
- four `Image` messages (left/right grayscale, left/right colour). Every image
  is loaded as 8-bit three-channel data in BGR order, encoding `bgr8`, whatever
  the file holds,
- an `Imu` message built from the OXTS record: orientation from roll, pitch and
  yaw, angular velocity from fields 8–10, linear acceleration from fields 11–13,
- a `NavSatFix` with latitude, longitude, altitude and an approximated position
  covariance whose diagonal is field 23 of the record,
- a `MarkerArray` holding one cylinder `Marker` at the projected GPS position;
  the marker id starts at 1 and grows by one per frame.

The WGS84 helpers used for the marker position live in `kittipub.wgs84`:
`to_cartesian`, `from_cartesian` and `latlon_to_utm` (which returns an `Xy`).

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Dataset layout

A recording is found at `<prefix>/<date>/<dataset>` and is expected to hold:

```
velodyne_points/data/   Velodyne scans
image_00/data/          grayscale left
image_01/data/          grayscale right
image_02/data/          colour left
image_03/data/          colour right
oxts/data/              OXTS text records
```

The regular files in each directory are sorted by name. A directory that
cannot be read is logged as an error and its stream gets no files. The number
of frames is the number of colour-left images; the grayscale streams are read
with the colour file names of the same side. A file that is missing when its
frame comes up raises an error.

## Command line

```
kitti-publishers --kitti-prefix PREFIX --kitti-date DATE --kitti-dataset DATASET \
    [--period SECONDS] [--max-ticks N]
```

The command builds a `KittiPublishersNode`, logs to standard output at INFO
level and calls `on_timer` every `--period` seconds (default 0.1). For each
published message it prints a line `topic: MessageType`, for example
`kitti/imu: Imu`. Once the frames run out every further tick logs
`No more data: all messages have been published.`; without `--max-ticks` the
command keeps ticking until it is interrupted with Ctrl-C.

Topics, in the order they are emitted per frame:

```
kitti/point_cloud
kitti/image/gray/left
kitti/image/gray/right
kitti/image/color/left
kitti/image/color/right
kitti/imu
kitti/nav_sat_fix
kitti/marker_array
```

## Library use

```python
from kittipub.node import KittiPublishersNode, PublisherType
from kittipub.wgs84 import to_cartesian, latlon_to_utm
from kittipub.oxts import parse_oxts_file, imu_from_oxts
from kittipub.sensors import read_point_cloud, load_image

x, y = to_cartesian((49.0, 8.4), (49.001, 8.401))
utm = latlon_to_utm(49.0, 8.4)
print(utm.x, utm.y)

tokens = parse_oxts_file("oxts/data/0000000000.txt", " ")
imu = imu_from_oxts(tokens, stamp=0.0)
print(imu.orientation)
```

To receive messages instead of having them printed, pass a callable taking
`(topic, message)`:

```python
received = []
node = KittiPublishersNode("/data/kitti", "2011_09_26", "2011_09_26_drive_0001_sync",
                           publish=lambda topic, msg: received.append((topic, msg)))
while node.on_timer():
    pass
```

`KittiPublishersNode.get_path`, `get_filenames` and `set_filenames` take a
`PublisherType` (`POINT_CLOUD`, `IMAGE_LEFT_GRAY`, `IMAGE_RIGHT_GRAY`,
`IMAGE_LEFT_COLOR`, `IMAGE_RIGHT_COLOR`, `ODOMETRY`). `on_timer` emits one
frame and returns `False` once there are none left; `spin(period, max_ticks)`
calls it on a fixed period and returns the number of frames published.

## What it does not do

The messages are plain Python objects handed to the `publish` callable. The
package does not send them over any network or middleware, and it writes no
files; the command line only prints the topic and message type of each one.