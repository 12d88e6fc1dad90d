[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kittipub"
version = "0.1.0"
description = "Replay KITTI raw recordings as timed sensor messages: point clouds, camera images, IMU, GPS fixes and position markers"
requires-python = ">=3.10"
keywords = ["kitti", "lidar", "point-cloud", "imu", "gps", "oxts", "wgs84", "utm", "dataset", "robotics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
kitti-publishers = "kittipub.node:main"

[tool.hatch.build.targets.wheel]
packages = ["kittipub"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
