[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "linecover"
version = "0.1.0"
description = "Line coverage routing: Chinese and rural postman tours, LP-based beta heuristics and an exact integer programme"
requires-python = ">=3.10"
keywords = ["arc routing", "line coverage", "chinese postman", "rural postman", "graph algorithms", "optimization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "scipy",
    "numpy",
    "networkx",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["linecover"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
