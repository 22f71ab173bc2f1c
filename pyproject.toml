[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "levitron"
version = "0.1.0"
description = "Acoustic levitation toolkit: transducer field propagation, Gor'kov forces, board calibration files, board message encoding and field visualisation."
requires-python = ">=3.10"
keywords = ["acoustics", "levitation", "phased array", "ultrasound", "gorkov", "transducers"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
    "scipy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["levitron"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
