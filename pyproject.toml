[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "disarray"
version = "0.1.0"
description = "Small game toolkit: matrices, collision tests, TGA images, particles, mesh models and two headless sample game rule sets"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "matrix", "vector", "collision", "tga", "particles", "mesh", "match-3"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["disarray"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
