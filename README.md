# paradox

The core of a small 3D game engine, written with numpy. It holds the parts
of an engine that do not depend on a graphics card: the scene graph,
collision tests, rigid-body physics, heightmap terrain, camera maths, light
parameters, skeletal animation, GLSL uniform scanning and WAV parsing.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## What is in the package

| Module | Contents |
| --- | --- |
| `paradox.intersect` | `IntersectData` (`does_intersect`, `direction`, `distance`) and `PhysicsMaterial` |
| `paradox.colliders` | `Collider`, `SphereCollider`, `PlaneCollider`, `AABBCollider`, `TerrainCollider`, `ColliderType`, `Direction`, `UnsupportedCollisionError` |
| `paradox.transform` | `Transform`, plus `quat_from_axis_angle`, `quat_multiply`, `translation_matrix`, `rotation_matrix`, `scale_matrix` |
| `paradox.component` | `Component` and `Behavior`, the bases of everything attached to a game object |
| `paradox.camera` | `Camera` (pitch and yaw in degrees), `perspective`, `look_at` |
| `paradox.terrain` | `Terrain`, `TerrainMesh`, `barycentric` |
| `paradox.physics_object` | `PhysicsObject`, a point mass with velocity, gravity and an optional collider |
| `paradox.physics_engine` | `PhysicsEngine` and `default_engine()` |
| `paradox.lights` | `Light`, `DirectionalLight`, `PointLight`, `SpotLight` |
| `paradox.game_object` | `GameObject`, a node of the scene graph |
| `paradox.scene` | `Scene` and `ObjectNotFoundError` |
| `paradox.input` | `Input`, press and release edges between frames |
| `paradox.engine` | `CoreEngine` (fixed-step loop), `RenderingEngine`, `now_ticks`, `calc_average_normals` |
| `paradox.shader_source` | `ShaderSource`, `Uniform`, `parse_structs`, `parse_uniforms` |
| `paradox.material` | `Material`, named textures and float values |
| `paradox.animation` | `Animator`, `Animation`, `AnimationNode`, `NodeAnimation`, `Bone`, `VectorKey`, `QuaternionKey`, `nlerp`, `interpolate_vector`, `interpolate_rotation` |
| `paradox.wavedata` | `parse_wav`, `load_wav`, `WaveData`, `AudioFormat`, `WaveFormatError` |

## Example: a sphere resting on a plane

```python
import numpy as np

from paradox.colliders import PlaneCollider, SphereCollider

plane = PlaneCollider(np.array([0.0, 1.0, 0.0]), 0.0)
sphere = SphereCollider(np.array([0.0, 0.5, 0.0]), 1.0)

hit = plane.intersect(sphere)
print(hit.does_intersect, hit.distance)   # True -0.5
```

`Collider.intersect` handles sphere–sphere, plane–sphere, terrain–sphere,
box–sphere and plane–box pairs, with the first collider's type first. Any
other pair raises `UnsupportedCollisionError`.

## Example: terrain heights

`Terrain` takes a pixel array and uses its red channel as heights, from 0 to
4 units. Each terrain patch is 30 units square at `grid_x * 30`,
`grid_z * 30`. `Terrain.from_file` reads the pixels from an image file.

```python
import numpy as np

from paradox.terrain import Terrain

pixels = np.full((256, 256, 3), 255, dtype=np.uint8)
terrain = Terrain(0, 0, pixels)
print(terrain.height_of_terrain(10.0, 10.0))   # about 4.0
print(terrain.height_of_terrain(-5.0, 10.0))   # -1.0, off the terrain
```

## Example: a scene

```python
from paradox.game_object import GameObject
from paradox.scene import Scene

scene = Scene()
scene.add_object(GameObject("player"))
player = scene.find_object("player")
player.move((1.0, 0.0, 0.0))
print(player.transform.translation)   # [1. 0. 0.]
```

`find_object` raises `ObjectNotFoundError` when no object has the given
name. When a game object carries a `PhysicsObject`, `move` leaves the
movement in `pending_move` and the physics object applies it on its next
update.

## Example: reading a WAV file

```python
from paradox.wavedata import load_wav

wave = load_wav("sound.wav")
print(wave.format, wave.frequency, len(wave.data))
```

`parse_wav` does the same for bytes already in memory. A malformed or
truncated file raises `WaveFormatError`. `format` is `None` when the channel
count and bit depth are not mono or stereo at 8 or 16 bits.

## Example: scanning shader uniforms

```python
from paradox.shader_source import ShaderSource

vertex = "uniform mat4 T_model;\nvoid main() {}\n"
fragment = "struct Light { vec3 colour; float ambientIntensity; };\nuniform Light L_light;\n"
source = ShaderSource(vertex, fragment)
for uniform in source.uniforms:
    print(uniform.glsl_type, uniform.name)
```

Struct uniforms are expanded into their members, up to two levels deep.
`ShaderSource.resolve_uniforms` works out the values for `T_` (matrices),
`M_` (material) and `L_` (active light) uniforms and returns them with the
texture units they use.

## What the package does not do

- It opens no window and draws nothing. `RenderingEngine.render` calls
  `render` on every component in the scene graph and `render_light` on each
  light that has one; nothing is sent to a graphics card.
- `CoreEngine` needs a window object supplied by the caller, with
  `should_close()`, `update()` and `close()` methods.
- `Input` does not read a keyboard itself; it is given a function that
  reports whether a key is held.
- `Camera` reads pointer movement only through an optional `pointer`
  function.
- Shader programs are not compiled or linked, and textures are plain integer
  ids in a `Material`.
- WAV files are parsed, not played.
- No model files are loaded; animation node trees, bones and keyframes are
  built by the caller.