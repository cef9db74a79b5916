[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mpdwire"
version = "0.1.0"
description = "A client library for the Music Player Daemon protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["mpd", "music", "music-player-daemon", "protocol", "client"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mpdwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
