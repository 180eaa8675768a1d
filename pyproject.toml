[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tomlex"
version = "0.1.0"
description = "A small state-machine lexer for TOML documents"
requires-python = ">=3.10"
dependencies = []
keywords = ["toml", "lexer", "tokenizer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tomlex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
