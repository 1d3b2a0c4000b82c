[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "diffdrive"
version = "0.1.0"
description = "Closed-loop motion control for two-wheel differential-drive chassis: PID controllers, line following and circular paths"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "pid", "differential-drive", "motion-control", "path-following"]
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
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["diffdrive"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
