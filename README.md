# r3dgeom

Pure-Python building blocks for 3D mesh data: small vector, quaternion and
matrix types, an indexed triangle mesh, procedural cylinders and cones,
heightmap and cubic-map terrain, conversion of imported scene meshes with
skinning weights, PBR material setup from material properties, and skeletal
animation baked into per-frame bone matrices. It has no dependencies outside
the standard library.

## Modules

| Module | What it holds |
| --- | --- |
| `r3dgeom.vecmath` | `Vec2`, `Vec3`, `Vec4`, `Quat`, `Matrix`, `slerp`, `identity_matrix`, `scale_matrix`, `translate_matrix` |
| `r3dgeom.mesh` | `Vertex`, `BoundingBox`, `Mesh`, `MeshError` |
| `r3dgeom.solids` | `gen_mesh_cylinder`, `gen_mesh_cone` |
| `r3dgeom.terrain` | `Image`, `gen_mesh_heightmap`, `gen_mesh_cubicmap` |
| `r3dgeom.scene` | an in-memory scene: `SceneMesh`, `SceneBone`, `VertexWeight`, `SceneNode`, `SceneAnimation`, `NodeAnim`, `VectorKey`, `QuatKey`, `Scene` |
| `r3dgeom.importer` | `process_scene_mesh`, `collect_bones`, `build_bone_hierarchy`, `BoneInfo` |
| `r3dgeom.material` | `Material` and its enums, `default_material`, `material_from_properties`, `color_from_floats`, `pack_orm` |
| `r3dgeom.animation` | `ModelAnimation`, `interpolate_vec3`, `interpolate_quat`, `node_transform_at_time`, `global_transforms`, `process_animation`, `load_animations`, `find_animation` |

## Meshes

A `Mesh` holds a list of `Vertex` objects (position, texcoord, normal,
colour, tangent, four bone ids and four weights), a flat list of triangle
indices and an axis-aligned `BoundingBox`. `Mesh.triangles()` yields index
triples and raises `MeshError` when the index count is not a multiple of
three or an index names no vertex. `Mesh.update_bounding_box()` recomputes
the box from the vertex positions.

```python
from r3dgeom.solids import gen_mesh_cylinder, gen_mesh_cone

cylinder = gen_mesh_cylinder(radius=1.0, height=2.0, slices=8)
print(cylinder.vertex_count, cylinder.index_count)   # 36 96
print(cylinder.aabb.min, cylinder.aabb.max)

cone = gen_mesh_cone(0.5, 1.0, 8)
for a, b, c in cone.triangles():
    ...
```

Both generators use +Y up and -Z forward, centre the shape on the origin and
raise `MeshError` for a non-positive radius or height or fewer than three
slices.

## Terrain

```python
from r3dgeom.terrain import Image, gen_mesh_heightmap, gen_mesh_cubicmap
from r3dgeom.vecmath import Vec3

heights = Image(2, 2, [(0, 0, 0, 255), (255, 0, 0, 255),
                       (0, 0, 0, 255), (128, 0, 0, 255)])
terrain = gen_mesh_heightmap(heights, Vec3(10.0, 2.0, 10.0))

maze = Image(2, 1, [(255, 255, 255, 255), (0, 0, 0, 255)])
walls = gen_mesh_cubicmap(maze, Vec3(1.0, 1.0, 1.0))
```

`gen_mesh_heightmap` reads heights from the red channel (0..255 scaled to
0..`size.y`) and needs at least 2x2 pixels. `gen_mesh_cubicmap` builds a
block for every white pixel, leaving out side faces hidden by a white
neighbour, and a floor and ceiling for every black pixel; other colours
produce nothing.

## Imported scenes

`r3dgeom.scene` describes what a model importer would produce: meshes with
optional normals, texture coordinates, tangents, bitangents and colours,
bones with vertex weights and offset matrices, a node tree and animation
channels. From such a scene:

- `process_scene_mesh` builds a `Mesh`. It keeps at most four bone
  influences per vertex (replacing the smallest when a larger one arrives),
  ignores weights below 0.001, normalises the weights, and raises
  `MeshError` for an empty mesh, a non-triangular face or an out-of-range
  index.
- `collect_bones` returns the unique bones of all meshes (names cut to 31
  characters) with their offset matrices, each bone's `parent` set from the
  nearest ancestor node that is also a bone.

## Materials

`material_from_properties` starts from `default_material()` (opaque white,
roughness 1, metalness 0, back-face culling) and applies the keys defined as
constants in `r3dgeom.material`: colours, opacity, roughness and metallic
factors, two-sidedness, glTF alpha mode and cutoff, transmission and blend
function, plus texture references. Texture fields hold whatever the
properties give; `None` stands for the built-in default map.

`pack_orm(occlusion, roughness, metalness, width, height)` packs the red
channel of the occlusion image, the green of the roughness image and the
blue of the metalness image into RGB bytes; a missing image reads as 255.

## Animation

```python
from r3dgeom.animation import load_animations, find_animation
from r3dgeom.scene import (NodeAnim, QuatKey, Scene, SceneAnimation, SceneBone,
                           SceneMesh, SceneNode, VectorKey)
from r3dgeom.vecmath import Quat, Vec3

scene = Scene(
    meshes=[SceneMesh(positions=[Vec3(), Vec3(1, 0, 0), Vec3(0, 1, 0)],
                      faces=[(0, 1, 2)], bones=[SceneBone("arm")])],
    root=SceneNode("root", children=[SceneNode("arm")]),
    animations=[SceneAnimation("wave", duration=50.0, ticks_per_second=25.0, channels=[
        NodeAnim("arm",
                 position_keys=[VectorKey(0.0, Vec3(0, 1, 0))],
                 rotation_keys=[QuatKey(0.0, Quat())],
                 scaling_keys=[VectorKey(0.0, Vec3(1, 1, 1))]),
    ])],
)

animations = load_animations(scene, target_frame_rate=30)
wave = find_animation(animations, "wave")
print(wave.frame_count, wave.bone_count)   # 60 1
```

Each frame of `ModelAnimation.frame_poses` holds one global matrix per bone.
Keys are interpolated linearly (positions, scales) or spherically
(rotations) and held at the last key past the end. A ticks-per-second of 0
is taken as 25. A node whose animated transform is the identity keeps its
own bind transform. `load_animations` skips animations that cannot be baked
and raises `ValueError` when none can.

## What this package does not do

- It reads no model files: scenes are built in memory with
  `r3dgeom.scene`.
- It has no GPU side: meshes are plain Python lists, nothing is uploaded or
  drawn, and textures are never loaded or decoded.
- Of the procedural shapes it offers only cylinders, cones and the two
  terrain generators; there are no planes, polygons, cubes, spheres, tori or
  knots.
- There is no single model object that gathers a scene's meshes, materials
  and bones; combine `process_scene_mesh`, `material_from_properties` and
  `collect_bones` yourself.

## Tests

The test suite uses pytest, which the `test` extra installs.