[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paradox"
version = "0.1.0"
description = "Core of a small 3D game engine: scene graph, colliders, rigid-body physics, terrain, cameras, lights, skeletal animation, GLSL uniform scanning and WAV parsing."
requires-python = ">=3.10"
keywords = [
    "game engine",
    "physics",
    "collision",
    "scene graph",
    "terrain",
    "animation",
    "glsl",
    "wav",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["paradox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
