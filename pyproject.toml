[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parbench"
version = "0.1.0"
description = "Benchmarks of sequential, Strassen, thread-parallel and simulated message-passing matrix multiplication, with related parallel-programming exercises"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "benchmark",
    "matrix multiplication",
    "strassen",
    "parallel",
    "speedup",
    "scatter",
    "gather",
    "message passing",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
parbench-multmat = "parbench.multmat:main"
parbench-scatter-gather = "parbench.scatter_gather:main"
parbench-send-recv = "parbench.send_recv:main"

[tool.hatch.build.targets.wheel]
packages = ["parbench"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
