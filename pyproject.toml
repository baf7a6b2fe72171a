[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "robocar"
version = "0.1.0"
description = "Control logic for a small robot car: serial command protocol, motor drivers and manoeuvre state machines"
requires-python = ">=3.10"
dependencies = []
keywords = ["robot", "car", "serial", "state-machine", "pwm", "embedded"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["robocar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
