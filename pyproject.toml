[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskkit"
version = "0.1.0"
description = "Building blocks for a task runner: ordered variables, output styles, up-to-date checks, task listing, flag parsing and helper commands."
requires-python = ">=3.10"
keywords = ["task-runner", "build", "make", "taskfile", "automation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "pyyaml>=6.0",
    "python-dotenv>=1.0",
    "semver>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
sleepit = "taskkit.sleepit:main"
taskkit-release = "taskkit.release:main"

[tool.hatch.build.targets.wheel]
packages = ["taskkit"]

[tool.hatch.build.targets.sdist]
include = ["taskkit", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
