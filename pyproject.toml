[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dualcal"
version = "0.1.0"
description = "Cell ids, hit records, histograms and resolution fits for a dual-readout calorimeter test beam"
requires-python = ">=3.10"
keywords = [
    "calorimetry",
    "dual-readout",
    "cherenkov",
    "scintillation",
    "energy resolution",
    "test beam",
    "histogram",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
    "scipy",
    "matplotlib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dualcal-resve = "dualcal.resve:main"

[tool.hatch.build.targets.wheel]
packages = ["dualcal"]

[tool.hatch.build.targets.sdist]
include = [
    "dualcal",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
