"""Surface material: named textures and named float values."""

from __future__ import annotations


class Material:
    """Textures and scalar values of a surface, looked up by name.

    The ``normalMap`` slot is filled with the diffuse texture.
    """

    def __init__(
        self,
        diffuse_texture: int,
        specular_intensity: float,
        shininess: float,
        normal_map: int = 0,
    ) -> None:
        self.textures: dict[str, int] = {}
        self.values: dict[str, float] = {}
        self.add_texture("diffuseTexture", diffuse_texture)
        self.add_texture("normalMap", diffuse_texture)
        self.values["specularIntensity"] = float(specular_intensity)
        self.values["shininess"] = float(shininess)

    def add_texture(self, name: str, texture_id: int) -> None:
        self.textures[name] = int(texture_id)

    def get_float(self, name: str) -> float:
        try:
            return self.values[name]
        except KeyError:
            raise KeyError(f"material has no value named {name!r}") from None

    def get_texture(self, name: str) -> int:
        """Texture id stored under ``name``, or 0 when there is none."""
        return self.textures.get(name, 0)