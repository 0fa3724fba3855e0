"""Conversion of imported scene meshes and bones into renderable data."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from itertools import repeat
from typing import Iterable

from .mesh import BoundingBox, Mesh, MeshError, Vertex
from .scene import Scene, SceneMesh, SceneNode
from .vecmath import Matrix, Vec2, Vec3, Vec4

MAX_BONE_NAME = 31
MAX_BONE_INFLUENCES = 4
MIN_BONE_WEIGHT = 0.001

_DEFAULT_NORMAL = Vec3(0.0, 0.0, 1.0)
_DEFAULT_TANGENT = Vec4(1.0, 0.0, 0.0, 1.0)
_WHITE = Vec4(1.0, 1.0, 1.0, 1.0)


@dataclass(slots=True)
class BoneInfo:
    """A bone name (at most 31 characters) and the index of its parent, or -1."""

    name: str
    parent: int = -1

    def __post_init__(self) -> None:
        self.name = self.name[:MAX_BONE_NAME]


def _optional(values: list | None) -> Iterable:
    return values if values is not None else repeat(None)


def _add_influence(vertex: Vertex, bone_index: int, weight: float) -> None:
    """Store a bone weight in a free slot, or replace the smallest if it is larger."""
    slot = next((s for s, w in enumerate(vertex.weights) if w == 0.0), None)
    if slot is None:
        slot = min(range(MAX_BONE_INFLUENCES), key=vertex.weights.__getitem__)
        if weight <= vertex.weights[slot]:
            return
    vertex.weights[slot] = weight
    vertex.bone_ids[slot] = bone_index


def process_scene_mesh(scene_mesh: SceneMesh) -> Mesh:
    """Build a triangle mesh with skinning data from an imported mesh."""
    positions = scene_mesh.positions
    if not positions or not scene_mesh.faces:
        raise MeshError("empty mesh")
    count = len(positions)

    vertices: list[Vertex] = []
    for position, texcoord, normal, tangent, bitangent, color in zip(
        positions,
        _optional(scene_mesh.texcoords),
        _optional(scene_mesh.normals),
        _optional(scene_mesh.tangents),
        _optional(scene_mesh.bitangents),
        _optional(scene_mesh.colors),
    ):
        if normal is not None and tangent is not None and bitangent is not None:
            handedness = normal.cross(tangent).dot(bitangent)
            vertex_tangent = Vec4(tangent.x, tangent.y, tangent.z, -1.0 if handedness < 0.0 else 1.0)
        else:
            vertex_tangent = _DEFAULT_TANGENT
        vertices.append(Vertex(
            position,
            texcoord if texcoord is not None else Vec2(),
            normal if normal is not None else _DEFAULT_NORMAL,
            color if color is not None else _WHITE,
            vertex_tangent,
        ))

    if scene_mesh.bones:
        for bone_index, bone in enumerate(scene_mesh.bones):
            for influence in bone.weights:
                if not 0 <= influence.vertex_id < count:
                    continue
                if influence.weight < MIN_BONE_WEIGHT:
                    continue
                _add_influence(vertices[influence.vertex_id], bone_index, influence.weight)
        for vertex in vertices:
            total = sum(vertex.weights)
            if total > 0.0:
                vertex.weights = [w / total for w in vertex.weights]
            else:
                vertex.weights[0] = 1.0
                vertex.bone_ids[0] = 0
    else:
        for vertex in vertices:
            vertex.weights[0] = 1.0
            vertex.bone_ids[0] = 0

    indices: list[int] = []
    for face in scene_mesh.faces:
        if len(face) != 3:
            raise MeshError(f"non-triangular face detected (indices: {len(face)})")
        bad = next((i for i in face if not 0 <= i < count), None)
        if bad is not None:
            raise MeshError(f"invalid vertex index ({bad} >= {count})")
        indices.extend(face)

    aabb = BoundingBox(
        reduce(Vec3.minimum, positions),
        reduce(Vec3.maximum, positions),
    )
    return Mesh(vertices, indices, aabb)


def build_bone_hierarchy(root: SceneNode, bones: list[BoneInfo]) -> None:
    """Set each bone's parent from the nearest ancestor node that is also a bone."""
    index: dict[str, int] = {}
    for i, bone in enumerate(bones):
        index.setdefault(bone.name, i)

    stack: list[tuple[SceneNode, int]] = [(root, -1)]
    while stack:
        node, parent = stack.pop()
        current = index.get(node.name)
        if current is not None:
            bones[current].parent = parent
            parent = current
        stack.extend((child, parent) for child in reversed(node.children))


def collect_bones(scene: Scene) -> tuple[list[BoneInfo], list[Matrix]]:
    """Unique bones of all meshes with their offset matrices, linked to their parents."""
    bones: list[BoneInfo] = []
    offsets: list[Matrix] = []
    seen: set[str] = set()
    for mesh in scene.meshes:
        for bone in mesh.bones:
            info = BoneInfo(bone.name)
            if info.name in seen:
                continue
            seen.add(info.name)
            bones.append(info)
            offsets.append(bone.offset_matrix)

    if bones and scene.root is not None:
        build_bone_hierarchy(scene.root, bones)
    return bones, offsets