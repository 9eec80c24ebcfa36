[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "particlesim"
version = "0.1.0"
description = "Particle and rigid-body force simulation: emitters, force fields, springs, buoyancy and fireworks"
requires-python = ">=3.10"
dependencies = []
keywords = ["physics", "particles", "simulation", "forces", "springs", "fireworks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["particlesim"]

[tool.pytest.ini_options]
addopts = "-ra"
