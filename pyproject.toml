[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gf2bench"
version = "0.1.0"
description = "Benchmark engine with statistical stopping rules, cycle counting and GF(2) matrix benchmark signatures"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "benchmark",
    "statistics",
    "student-t",
    "confidence-interval",
    "cpu-cycles",
    "gf2",
    "linear-algebra",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
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
gf2bench-cpucycles = "gf2bench.cpucycles:main"

[tool.hatch.build.targets.wheel]
packages = ["gf2bench"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
