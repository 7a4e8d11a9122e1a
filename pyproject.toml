[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hub75map"
version = "0.1.0"
description = "Coordinate mapping for chained and four-scan HUB75 RGB LED matrix panels, plus LED driver chip start-up sequences"
requires-python = ">=3.10"
dependencies = []
keywords = ["hub75", "led-matrix", "rgb", "panel", "mapping", "fm6124", "dp3246"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hub75map"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
