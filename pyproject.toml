[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trafficplanner"
version = "0.1.0"
description = "Multi-modal route and tour planning over a network of city landmarks, airports and high-speed rail stations"
requires-python = ">=3.10"
dependencies = []
keywords = ["routing", "a-star", "tsp", "travel", "transport", "haversine"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Science/Research",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
trafficplanner = "trafficplanner.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["trafficplanner"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
