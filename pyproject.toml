[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "anchordbg"
version = "0.2.1"
description = "Generate a standalone native debug wrapper crate for Anchor Solana programs, ready to step through with lldb."
requires-python = ">=3.10"
keywords = ["solana", "anchor", "lldb", "debugging", "cli", "codegen"]
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
    "Topic :: Software Development :: Code Generators",
    "Topic :: Software Development :: Debuggers",
]
dependencies = [
    "tomlkit>=0.12",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
anchordbg = "anchordbg.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["anchordbg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
