"""Height-mapped terrain: mesh generation and height queries."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from PIL import Image

from paradox.component import Component

TERRAIN_SIZE = 30.0
VERTEX_COUNT = 200
MAX_HEIGHT = 4.0


def barycentric(p1, p2, p3, pos) -> float:
    """Height at ``pos`` (x, z) on the triangle through three (x, height, z) points."""
    p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p1, p2, p3))
    px, pz = (float(v) for v in pos)
    det = (p2[2] - p3[2]) * (p1[0] - p3[0]) + (p3[0] - p2[0]) * (p1[2] - p3[2])
    l1 = ((p2[2] - p3[2]) * (px - p3[0]) + (p3[0] - p2[0]) * (pz - p3[2])) / det
    l2 = ((p3[2] - p1[2]) * (px - p3[0]) + (p1[0] - p3[0]) * (pz - p3[2])) / det
    l3 = 1.0 - l1 - l2
    return float(l1 * p1[1] + l2 * p2[1] + l3 * p3[1])


@dataclass(frozen=True, eq=False)
class TerrainMesh:
    """Vertex data of a terrain grid, one row per vertex."""

    vertices: np.ndarray
    normals: np.ndarray
    tex_coords: np.ndarray
    indices: np.ndarray


class Terrain(Component):
    """A square patch of terrain whose heights come from an image's red channel."""

    def __init__(self, grid_x: int, grid_z: int, pixels) -> None:
        super().__init__()
        data = np.asarray(pixels)
        if data.ndim == 3:
            red = data[..., 0]
        elif data.ndim == 2:
            red = data
        else:
            raise ValueError("height map must be a 2-D or 3-D pixel array")
        self.image_height, self.image_width = red.shape
        self._red = np.ascontiguousarray(red, dtype=float).reshape(-1)
        self.size = TERRAIN_SIZE
        self.vertex_count = VERTEX_COUNT
        self.x = grid_x * TERRAIN_SIZE
        self.z = grid_z * TERRAIN_SIZE
        self.heights, self.mesh = self._generate()

    @classmethod
    def from_file(cls, grid_x: int, grid_z: int, path) -> "Terrain":
        """Build a terrain from a height-map image file."""
        with Image.open(path) as image:
            pixels = np.asarray(image.convert("RGB"))
        return cls(grid_x, grid_z, pixels)

    def _heights_at(self, xs, ys) -> np.ndarray:
        xs, ys = np.broadcast_arrays(np.asarray(xs, dtype=int), np.asarray(ys, dtype=int))
        valid = (xs >= 0) & (xs < self.image_width) & (ys >= 0) & (ys < self.image_height)
        out = np.zeros(xs.shape)
        index = xs[valid] + self.image_height * ys[valid]
        out[valid] = self._red[index] * (MAX_HEIGHT / 255.0)
        return out

    def _normals(self, xs, zs) -> np.ndarray:
        xs = np.asarray(xs, dtype=int)
        zs = np.asarray(zs, dtype=int)
        left = self._heights_at(xs - 1, zs)
        right = self._heights_at(xs + 1, zs)
        down = self._heights_at(xs, zs - 1)
        up = self._heights_at(xs, zs + 1)
        normals = np.stack([left - right, np.full(left.shape, 2.0), down - up], axis=-1)
        return normals / np.linalg.norm(normals, axis=-1, keepdims=True)

    def pixel_height(self, x: int, y: int) -> float:
        """Height of height-map pixel ``(x, y)``; zero outside the image."""
        return float(self._heights_at(x, y))

    def calculate_normal(self, x: int, z: int) -> np.ndarray:
        """Unit normal at pixel ``(x, z)`` from its four neighbours."""
        return self._normals(x, z)

    def _generate(self) -> tuple[np.ndarray, TerrainMesh]:
        n = self.vertex_count
        steps = np.arange(n)
        jj, ii = np.meshgrid(steps, steps)
        grid_heights = self._heights_at(jj, ii)
        fraction_x = jj / (n - 1)
        fraction_z = ii / (n - 1)
        vertices = np.stack(
            [self.x + fraction_x * self.size, grid_heights, self.z + fraction_z * self.size], axis=-1
        ).reshape(-1, 3)
        normals = self._normals(jj, ii).reshape(-1, 3)
        tex_coords = np.stack([fraction_x, fraction_z], axis=-1).reshape(-1, 2)

        cells = np.arange(n - 1)
        gx, gz = np.meshgrid(cells, cells)
        top_left = gz * n + gx
        top_right = top_left + 1
        bottom_left = (gz + 1) * n + gx
        bottom_right = bottom_left + 1
        indices = np.stack(
            [top_left, bottom_left, top_right, top_right, bottom_left, bottom_right], axis=-1
        ).reshape(-1).astype(np.uint16)

        mesh = TerrainMesh(vertices, normals, tex_coords, indices)
        return grid_heights.T.copy(), mesh

    def height_of_terrain(self, world_x: float, world_z: float) -> float:
        """Interpolated terrain height at a world position, or -1.0 off the terrain."""
        terrain_x = world_x - self.x
        terrain_z = world_z - self.z
        square = self.size / (self.vertex_count - 1)
        grid_x = math.floor(terrain_x / square)
        grid_z = math.floor(terrain_z / square)
        last = self.vertex_count - 1
        if grid_x >= last or grid_z >= last or grid_x < 0 or grid_z < 0:
            return -1.0
        x_coord = math.fmod(terrain_x, square) / square
        z_coord = math.fmod(terrain_z, square) / square
        h = self.heights
        if x_coord <= 1 - z_coord:
            return barycentric(
                (0, h[grid_x, grid_z], 0),
                (1, h[grid_x + 1, grid_z], 0),
                (0, h[grid_x, grid_z + 1], 1),
                (x_coord, z_coord),
            )
        return barycentric(
            (1, h[grid_x + 1, grid_z], 0),
            (1, h[grid_x + 1, grid_z + 1], 1),
            (0, h[grid_x, grid_z + 1], 1),
            (x_coord, z_coord),
        )

    def normal_at(self, world_x: float, world_z: float) -> np.ndarray:
        return self.calculate_normal(int(world_x), int(world_z))