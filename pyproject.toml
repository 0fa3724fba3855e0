[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "r3dgeom"
version = "0.1.0"
description = "Pure-Python mesh generation, imported-scene processing, PBR material setup and baked skeletal animation"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "mesh", "geometry", "procedural", "terrain", "animation", "skeleton", "pbr"]
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["r3dgeom"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
