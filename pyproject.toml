[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "airule"
version = "0.1.0"
description = "Interactively pick rule files from one directory and copy them into another."
requires-python = ">=3.10"
keywords = ["rules", "copy", "fuzzy-finder", "cli", "glob"]
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
    "Topic :: Utilities",
]
dependencies = [
    "prompt-toolkit>=3.0",
    "rich>=13.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
airule = "airule.main:main"

[tool.hatch.build.targets.wheel]
packages = ["airule"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
