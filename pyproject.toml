[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bfllvm"
version = "0.1.0"
description = "A Brainfuck to LLVM IR compiler, with a small IR model and function passes"
requires-python = ">=3.10"
dependencies = []
keywords = ["brainfuck", "llvm", "compiler", "ir", "value-numbering", "optimization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bfllvm = "bfllvm.compiler:main"

[tool.hatch.build.targets.wheel]
packages = ["bfllvm"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
