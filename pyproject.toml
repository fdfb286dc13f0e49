[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fabricut"
version = "0.1.0"
description = "Strip-packing solvers for cutting rectangular orders from a fabric roll: greedy, exhaustive search and a genetic metaheuristic"
requires-python = ">=3.10"
dependencies = []
keywords = ["strip packing", "cutting stock", "optimization", "genetic algorithm", "exhaustive search", "greedy"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fabricut-greedy = "fabricut.greedy:main"
fabricut-exhaustive = "fabricut.exhaustive:main"
fabricut-genetic = "fabricut.genetic:main"

[tool.hatch.build.targets.wheel]
packages = ["fabricut"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
