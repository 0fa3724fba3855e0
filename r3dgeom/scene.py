"""An in-memory scene description: meshes, bones, node graph and animations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from .vecmath import Matrix, Quat, Vec2, Vec3, Vec4, identity_matrix


@dataclass(frozen=True, slots=True)
class VectorKey:
    """A position or scale keyframe at ``time`` ticks."""

    time: float
    value: Vec3


@dataclass(frozen=True, slots=True)
class QuatKey:
    """A rotation keyframe at ``time`` ticks."""

    time: float
    value: Quat


@dataclass(slots=True)
class NodeAnim:
    """The keyframes that animate one node."""

    node_name: str
    position_keys: list[VectorKey] = field(default_factory=list)
    rotation_keys: list[QuatKey] = field(default_factory=list)
    scaling_keys: list[VectorKey] = field(default_factory=list)


@dataclass(slots=True)
class SceneAnimation:
    """A named animation: a duration in ticks and one channel per animated node."""

    name: str = ""
    duration: float = 0.0
    ticks_per_second: float = 0.0
    channels: list[NodeAnim] = field(default_factory=list)

    def channel(self, node_name: str) -> NodeAnim | None:
        """The first channel that animates ``node_name``, if any."""
        return next((c for c in self.channels if c.node_name == node_name), None)


@dataclass(frozen=True, slots=True)
class VertexWeight:
    """The influence of a bone on one vertex."""

    vertex_id: int
    weight: float


@dataclass(slots=True)
class SceneBone:
    """A bone with its vertex weights and its inverse bind matrix."""

    name: str
    weights: list[VertexWeight] = field(default_factory=list)
    offset_matrix: Matrix = field(default_factory=identity_matrix)


@dataclass(slots=True)
class SceneMesh:
    """Raw mesh data as read from a file; optional attributes are ``None`` when absent."""

    positions: list[Vec3]
    faces: list[tuple[int, ...]]
    normals: list[Vec3] | None = None
    texcoords: list[Vec2] | None = None
    tangents: list[Vec3] | None = None
    bitangents: list[Vec3] | None = None
    colors: list[Vec4] | None = None
    bones: list[SceneBone] = field(default_factory=list)
    material_index: int = 0

    def __post_init__(self) -> None:
        count = len(self.positions)
        for name in ("normals", "texcoords", "tangents", "bitangents", "colors"):
            values = getattr(self, name)
            if values is not None and len(values) != count:
                raise ValueError(f"mesh has {count} positions but {len(values)} {name}")


@dataclass(slots=True)
class SceneNode:
    """A node of the scene graph with its local transform."""

    name: str
    transformation: Matrix = field(default_factory=identity_matrix)
    children: list[SceneNode] = field(default_factory=list)

    def walk(self) -> Iterator[SceneNode]:
        """This node and all its descendants, depth first, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(slots=True)
class Scene:
    """Meshes, materials, the node graph and the animations of one imported file."""

    meshes: list[SceneMesh] = field(default_factory=list)
    root: SceneNode | None = None
    animations: list[SceneAnimation] = field(default_factory=list)
    materials: list[dict[str, Any]] = field(default_factory=list)

    def unique_bone_names(self) -> list[str]:
        """Bone names across all meshes, each once, in order of first appearance."""
        return list(dict.fromkeys(bone.name for mesh in self.meshes for bone in mesh.bones))