[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cooperutil"
version = "0.1.0"
description = "Utilities for network services: byte buffers, dates, logging, TLS policies, queues and thread pools"
requires-python = ">=3.10"
dependencies = []
keywords = ["buffer", "logging", "date", "thread pool", "tls", "utilities"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cooperutil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
