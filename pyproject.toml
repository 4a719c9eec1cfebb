[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "velera"
version = "0.0.1"
description = "Game Boy Advance emulator core: memory map, ARM7TDMI decoding, micro-operations and colour formats"
requires-python = ">=3.10"
keywords = ["emulator", "gba", "game boy advance", "arm7tdmi", "arm", "thumb"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["velera"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
