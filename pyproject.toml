[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pob-runtime"
version = "0.1.2"
description = "Runtime building blocks for Path of Building: input mapping, draw layers, tessellation, textures and installation"
requires-python = ">=3.10"
dependencies = [
    "requests",
    "pillow",
    "zstandard",
]
keywords = [
    "path-of-building",
    "runtime",
    "tessellation",
    "textures",
    "dds",
    "installer",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pob_runtime"]

[tool.hatch.build.targets.sdist]
include = [
    "pob_runtime",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
