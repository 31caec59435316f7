[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "snoowire"
version = "0.1.0"
description = "A client library for the Reddit API: accounts, comments, collections, flair, gold, listings, live threads and emoji."
requires-python = ">=3.10"
dependencies = [
    "requests>=2.25",
]
keywords = ["reddit", "api", "client", "http", "rest"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["snoowire"]

[tool.hatch.build.targets.sdist]
include = ["snoowire", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
