[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tagkit"
version = "0.1.0"
description = "Small data structures for memory-tagging experiments: interval trees, red-black trees, Bloom filters, ring queues and chunk unmapping planners"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "interval tree",
    "avl",
    "red-black tree",
    "bloom filter",
    "murmurhash",
    "circular queue",
    "memory tagging",
]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[project.scripts]
tagkit-intervals = "tagkit.intervaltree:main"
tagkit-ranges = "tagkit.ranges:main"

[tool.hatch.build.targets.wheel]
packages = ["tagkit"]

[tool.pytest.ini_options]
addopts = "-ra"
