[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osconfig"
version = "0.1.0"
description = "Operating system detection, patch filtering and reboot checks for managed Linux hosts"
requires-python = ">=3.10"
dependencies = []
keywords = ["os-release", "patching", "zypper", "rpm", "inventory", "reboot"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["osconfig"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
