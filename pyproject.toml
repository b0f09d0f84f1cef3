[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stpatchkit"
version = "0.8.5"
description = "Terminal emulator building blocks: box drawing, colour helpers, a reflowing screen, URL picking, keyboard selection and farbfeld images"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "emulator", "box-drawing", "reflow", "scrollback", "farbfeld"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stpatchkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
