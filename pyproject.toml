[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seamdb"
version = "0.1.0"
description = "Building blocks of a distributed database: hybrid logical timestamps, key space layout, service URIs and node identity."
requires-python = ">=3.10"
keywords = ["database", "distributed", "timestamp", "hybrid-logical-clock", "uri", "keys"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["seamdb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
