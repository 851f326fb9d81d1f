"""Light components: directional, point and spot lights."""

from __future__ import annotations

import math

import numpy as np

from paradox.component import Component

_SHADER_DIR = "src/Shaders/GLSLShaders/"


def _vec3(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(3)


class Light(Component):
    """Coloured light with ambient and diffuse intensities.

    ``values`` holds the named floats and vectors fed to the light's shader.
    """

    vertex_shader: str | None = None
    fragment_shader: str | None = None

    def __init__(
        self,
        red: float = 1.0,
        green: float = 1.0,
        blue: float = 1.0,
        ambient_intensity: float = 1.0,
        diffuse_intensity: float = 0.0,
    ) -> None:
        super().__init__()
        self.color = np.array([red, green, blue], dtype=float)
        self.ambient_intensity = float(ambient_intensity)
        self.diffuse_intensity = float(diffuse_intensity)
        self.values: dict[str, float | np.ndarray] = {}

    def _store_base_values(self) -> None:
        self.values["colour"] = self.color.copy()
        self.values["ambientIntensity"] = self.ambient_intensity
        self.values["diffuseIntensity"] = self.diffuse_intensity

    def add_to_engine(self, engine) -> None:
        engine.rendering_engine.add_light(self)


class DirectionalLight(Light):
    """Light shining everywhere along one direction."""

    vertex_shader = _SHADER_DIR + "DirectLightShader.vert"
    fragment_shader = _SHADER_DIR + "DirectLightShader.frag"

    def __init__(
        self,
        red: float,
        green: float,
        blue: float,
        ambient_intensity: float,
        diffuse_intensity: float,
        direction,
    ) -> None:
        super().__init__(red, green, blue, ambient_intensity, diffuse_intensity)
        self.direction = _vec3(direction)
        self.values["direction"] = self.direction.copy()
        self._store_base_values()


class PointLight(Light):
    """Light radiating from a position with distance attenuation."""

    vertex_shader = _SHADER_DIR + "DirectLightShader.vert"
    fragment_shader = _SHADER_DIR + "PointLightShader.frag"

    def __init__(
        self,
        red: float,
        green: float,
        blue: float,
        ambient_intensity: float,
        diffuse_intensity: float,
        position,
        constant: float,
        linear: float,
        exponent: float,
    ) -> None:
        super().__init__(red, green, blue, ambient_intensity, diffuse_intensity)
        self.position = _vec3(position)
        self.constant = float(constant)
        self.linear = float(linear)
        self.exponent = float(exponent)
        self.values["position"] = self.position.copy()
        self.values["exponent"] = self.exponent
        self.values["linear"] = self.linear
        self.values["constant"] = self.constant
        self._store_base_values()


class SpotLight(PointLight):
    """Point light limited to a cone around a direction; ``edge`` is in degrees."""

    fragment_shader = _SHADER_DIR + "SpotLightShader.frag"

    def __init__(
        self,
        red: float,
        green: float,
        blue: float,
        ambient_intensity: float,
        diffuse_intensity: float,
        position,
        direction,
        constant: float,
        linear: float,
        exponent: float,
        edge: float,
    ) -> None:
        super().__init__(
            red, green, blue, ambient_intensity, diffuse_intensity, position, constant, linear, exponent
        )
        direction = _vec3(direction)
        length = float(np.linalg.norm(direction))
        self.direction = direction / length if length > 0.0 else direction
        self.edge = float(edge)
        self.edge_cosine = math.cos(math.radians(self.edge))

    def set_flash(self, position, direction) -> None:
        """Move the light and aim it, as a torch held by the viewer."""
        self.position = _vec3(position)
        self.direction = _vec3(direction)