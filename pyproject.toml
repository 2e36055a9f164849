[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hpm"
version = "0.1.0"
description = "Edge Drawing edge and segment detection, pose geometry types and a small command-line parser"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["edge detection", "edge drawing", "computer vision", "segments", "pose"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hpm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
