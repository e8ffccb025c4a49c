[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mipsasm"
version = "1.0.0"
description = "Assembler for a subset of the MIPS instruction set, producing machine code and a listing"
requires-python = ">=3.10"
dependencies = []
keywords = ["mips", "assembler", "machine code", "listing"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Assemblers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mipsasm = "mipsasm.listing:main"

[tool.hatch.build.targets.wheel]
packages = ["mipsasm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
