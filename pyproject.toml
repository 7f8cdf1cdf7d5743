[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "agentwire"
version = "0.1.0"
description = "Agent-to-agent protocol types, JSON-RPC 2.0 envelopes and Server-Sent Events helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["a2a", "agent", "json-rpc", "sse", "server-sent-events", "protocol"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["agentwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
