[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chainprims"
version = "0.1.0"
description = "RLP stream encoding, hex serialization, byte helpers and key-value store primitives"
requires-python = ">=3.10"
dependencies = []
keywords = ["rlp", "recursive-length-prefix", "encoding", "hex", "key-value", "serialization"]
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "jsonschema"]

[tool.hatch.build.targets.wheel]
packages = ["chainprims"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
