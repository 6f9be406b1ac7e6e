[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gokazi"
version = "0.1.0"
description = "Command-line process manager that finds and stops configured tasks among running processes"
requires-python = ">=3.10"
keywords = ["process", "manager", "tasks", "cli", "psutil"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "psutil",
    "pyyaml",
    "pygments",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gokazi = "gokazi.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gokazi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
