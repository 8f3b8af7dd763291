[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coremark"
version = "1.0.0"
description = "CoreMark processor benchmark in Python: list, matrix and state-machine workloads with CRC validation."
requires-python = ">=3.10"
dependencies = []
keywords = ["benchmark", "coremark", "crc", "performance"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
coremark = "coremark.main:main"

[tool.hatch.build.targets.wheel]
packages = ["coremark"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
