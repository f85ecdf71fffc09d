[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "sensorcli"
version = "1.0.0"
description = "Command-line tool for debugging I2C sensors: scan, read, write and dump registers on a simulated bus"
requires-python = ">=3.10"
dependencies = []
keywords = ["i2c", "sensor", "registers", "debugging", "cli", "embedded", "mock"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sensorcli = "sensorcli.cli:main"

[tool.setuptools]
packages = ["sensorcli"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
