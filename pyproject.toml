[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "foxgrid"
version = "0.1.0"
description = "Simulated process-grid matrix multiplication: Fox's algorithm, Cartesian topologies and row-block distribution"
requires-python = ">=3.10"
keywords = ["fox algorithm", "matrix multiplication", "cartesian topology", "process grid", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
foxgrid-topology = "foxgrid.topology:main"
foxgrid-fox = "foxgrid.fox:main"
foxgrid-rowblock = "foxgrid.rowblock:main"

[tool.hatch.build.targets.wheel]
packages = ["foxgrid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
