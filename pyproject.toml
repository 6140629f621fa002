[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "touchgroove"
version = "0.1.0"
description = "Sequencing and sampling building blocks for touch-pad instruments: clocks, arpeggiators, swing triggers, loopers and slicers."
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "synthesizer", "arpeggiator", "looper", "slicer", "sequencer", "clock", "swing"]
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
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["touchgroove"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
