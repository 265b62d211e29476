[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "permga"
version = "0.1.0"
description = "Biased-wheel genetic algorithm over permutations for tool indexing and cyclic bandwidth problems"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "genetic algorithm",
    "permutation",
    "tool indexing",
    "cyclic bandwidth",
    "combinatorial optimization",
    "metaheuristic",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
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
permga-tip = "permga.cli:main_tip"
permga-cbp = "permga.cli:main_cbp"

[tool.hatch.build.targets.wheel]
packages = ["permga"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
