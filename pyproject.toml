[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tsmedia"
version = "0.1.0"
description = "MPEG-TS building blocks: codec descriptions, PMT track mapping, Opus framing, stream readers and timestamp decoding"
requires-python = ">=3.10"
dependencies = []
keywords = ["mpeg-ts", "transport stream", "pmt", "opus", "h264", "h265", "timestamps"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Conversion",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tsmedia"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
