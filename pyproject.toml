[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "roadnav"
version = "0.1.0"
description = "Road network builder with crossing detection, shortest and k-shortest route search, and a map viewer"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = [
    "road network",
    "shortest path",
    "dijkstra",
    "yen",
    "k-shortest paths",
    "segment intersection",
    "map viewer",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
roadnav = "roadnav.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["roadnav"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
