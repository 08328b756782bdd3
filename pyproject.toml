[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "horndeski"
version = "0.1.0"
description = "Cubic Horndeski scalar-tensor theory: stress-energy, scalar field evolution and coupling functions at a point"
requires-python = ">=3.10"
keywords = ["horndeski", "scalar-tensor", "numerical relativity", "ccz4", "gauss-bonnet", "modified gravity"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["horndeski"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
