[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rawdecode"
version = "0.1.0"
description = "Decoding building blocks for camera raw image formats"
requires-python = ">=3.10"
dependencies = []
keywords = ["raw", "camera", "cfa", "bayer", "huffman", "ciff", "cr3", "arw", "kodak"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rawdecode"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
