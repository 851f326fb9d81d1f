"""GLSL source scanning: struct layouts, uniform lists and uniform values."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from paradox.camera import perspective

_WHITESPACE = " \n\r\t\f\v"
_STRUCT_KEYWORD = "struct"
_UNIFORM_KEYWORD = "uniform"

# The deferred pass builds its projection with a field of view of 45 radians.
_DEFERRED_PROJECTION = perspective(math.degrees(45.0), 1.0, 0.1, 10000.0)

StructMembers = dict[tuple[str, str], str]


@dataclass(frozen=True)
class Uniform:
    """A uniform as the program sees it: its GLSL type and full name."""

    glsl_type: str
    name: str


def _skip_whitespace(code: str, start: int) -> int:
    for index in range(start, len(code)):
        if code[index] not in _WHITESPACE:
            return index
    return len(code)


def parse_structs(code: str) -> StructMembers:
    """Map ``(struct name, member name)`` to the member's type for every struct in ``code``."""
    structs: StructMembers = {}
    pos = code.find(_STRUCT_KEYWORD)
    while pos != -1:
        brace = code.find("{", pos)
        if brace == -1:
            break
        struct_name = code[pos + len(_STRUCT_KEYWORD) : brace].strip()
        end = code.find("}", pos)
        type_start = _skip_whitespace(code, brace + 1)
        semicolon = code.find(";", brace)
        while semicolon != -1 and (end == -1 or semicolon < end):
            space = max(code.rfind(" ", 0, semicolon + 1), type_start)
            member_type = code[type_start:space].strip()
            member_name = code[space:semicolon].strip()
            structs[(struct_name, member_name)] = member_type
            type_start = _skip_whitespace(code, semicolon + 1)
            semicolon = code.find(";", semicolon + 1)
        if end == -1:
            break
        pos = code.find(_STRUCT_KEYWORD, end)
    return structs


def _members(structs: StructMembers, struct_name: str) -> list[tuple[str, str]]:
    """Members of ``struct_name`` as ``(name, type)``, ordered by member name."""
    return [(member, kind) for (owner, member), kind in sorted(structs.items()) if owner == struct_name]


def _is_struct(structs: StructMembers, name: str) -> bool:
    return any(owner == name for owner, _ in structs)


def parse_uniforms(code: str, structs: StructMembers) -> list[Uniform]:
    """Uniforms declared in ``code``, with struct uniforms expanded up to two levels deep."""
    uniforms: list[Uniform] = []
    pos = code.find(_UNIFORM_KEYWORD)
    while pos != -1:
        semicolon = code.find(";", pos)
        stop = semicolon if semicolon != -1 else len(code)
        declaration = code[pos + len(_UNIFORM_KEYWORD) : stop].strip()
        glsl_type, separator, name = declaration.partition(" ")
        if not separator:
            name = declaration

        if _is_struct(structs, glsl_type):
            for member, member_type in _members(structs, glsl_type):
                if _is_struct(structs, member_type):
                    for inner, inner_type in _members(structs, member_type):
                        uniforms.append(Uniform(inner_type, f"{name}.{member}.{inner}"))
                else:
                    uniforms.append(Uniform(member_type, f"{name}.{member}"))
        else:
            uniforms.append(Uniform(glsl_type, name))

        if semicolon == -1:
            break
        pos = code.find(_UNIFORM_KEYWORD, semicolon)
    return uniforms


@dataclass
class ShaderSource:
    """Vertex and fragment source of a program with the uniforms they declare."""

    vertex_code: str
    fragment_code: str
    structs: StructMembers = field(init=False)
    uniforms: list[Uniform] = field(init=False)

    def __post_init__(self) -> None:
        self.structs = {**parse_structs(self.vertex_code), **parse_structs(self.fragment_code)}
        self.uniforms = parse_uniforms(self.vertex_code, self.structs) + parse_uniforms(
            self.fragment_code, self.structs
        )

    @classmethod
    def from_files(cls, vertex_path, fragment_path) -> "ShaderSource":
        """Read both stages from text files."""
        return cls(Path(vertex_path).read_text(), Path(fragment_path).read_text())

    def resolve_uniforms(self, transform, engine, material):
        """Values for the program's uniforms.

        Returns ``(values, textures)``: ``values`` maps uniform names to the
        values to upload, ``textures`` maps texture units to texture ids.
        ``T_`` uniforms take matrices, ``M_`` uniforms material values and
        ``L_`` uniforms values of the engine's active light.
        """
        camera = engine.main_camera
        values: dict[str, object] = {
            "eyePosition": np.array(camera.position, dtype=float),
            "gPosition": 0,
            "gNormal": 1,
            "gAlbedoSpec": 2,
        }
        textures: dict[int, int] = {}
        sampler_count = 0

        for uniform in self.uniforms:
            name = uniform.name
            if name.startswith("T_"):
                target = name[2:]
                if target == "projection":
                    values[name] = _DEFERRED_PROJECTION.copy()
                elif target == "view":
                    values[name] = camera.view_matrix()
                elif target == "model":
                    values[name] = transform.get_transformation()
            if name.startswith("M_"):
                key = name[11:]
                if uniform.glsl_type == "float":
                    values[name] = material.get_float(key)
                elif uniform.glsl_type == "sampler2D":
                    sampler_count += 1
                    values[name] = sampler_count
                    textures[sampler_count] = material.get_texture(key)
            if name.startswith("L_"):
                key = name[name.rfind(".") + 1 :]
                light_values = engine.active_light.values
                if uniform.glsl_type == "float":
                    values[name] = float(light_values[key])
                elif uniform.glsl_type == "vec3":
                    values[name] = np.array(light_values[key], dtype=float).reshape(3)
        return values, textures