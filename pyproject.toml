[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "samplecore"
version = "1.0.0"
description = "Sample-by-sample audio building blocks for a sampler: filters, effects, envelopes, buffers, resampling and pitch shifting"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "dsp", "sampler", "filter", "envelope", "synthesis", "resampling"]
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
packages = ["samplecore"]

[tool.pytest.ini_options]
addopts = "-ra"
