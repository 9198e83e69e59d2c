[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mobutil"
version = "0.1.0"
description = "Helpers for mobile build tooling: paths, prompts, reports, version parsing, links and cargo argument lists"
requires-python = ">=3.10"
keywords = ["build", "mobile", "cargo", "rustc", "versions", "symlink", "prompt"]
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
    "termcolor",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mobutil"]

[tool.pytest.ini_options]
addopts = "-ra"
