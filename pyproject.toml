[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "makegen"
version = "0.1.0"
description = "Generate portable Makefiles for C projects and libraries, with header dependencies extracted from sources"
requires-python = ">=3.10"
dependencies = []
keywords = ["make", "makefile", "build", "c", "generator", "posix", "watcom"]
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
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
makegen = "makegen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["makegen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
