[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plater"
version = "1.0.0"
description = "Arrange 3D-printable STL parts onto as few build plates as possible"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d-printing", "stl", "nesting", "bin-packing", "plate"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
plater = "plater.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["plater"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
