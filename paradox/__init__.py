"""Core of a small 3D game engine: scene graph, colliders, physics, terrain, camera, lights, animation, shader uniform scanning and WAV parsing."""

__version__ = "0.1.0"