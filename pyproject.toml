[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rkcfgkit"
version = "1.0.0"
description = "Read, edit and write Rockchip CFG partition configuration files"
requires-python = ">=3.10"
dependencies = []
keywords = ["rockchip", "cfg", "partition", "configuration", "binary"]
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

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rkcfgtool = "rkcfgkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rkcfgkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
