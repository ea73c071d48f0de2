[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pagedshell"
version = "0.1.0"
description = "A small shell with shell variables, a paged frame store with LRU eviction, and several process-scheduling policies"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "shell",
    "scheduler",
    "paging",
    "demand-paging",
    "lru",
    "round-robin",
    "operating-systems",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pagedshell = "pagedshell.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["pagedshell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
