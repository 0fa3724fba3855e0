"""Vertex, bounding box and indexed triangle mesh types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .vecmath import Matrix, Vec2, Vec3, Vec4

FLT_MAX = 3.4028234663852886e38


class MeshError(ValueError):
    """Raised when mesh data is inconsistent."""


@dataclass(slots=True)
class Vertex:
    """One mesh vertex with up to four bone influences."""

    position: Vec3 = field(default_factory=Vec3)
    texcoord: Vec2 = field(default_factory=Vec2)
    normal: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 1.0))
    color: Vec4 = field(default_factory=lambda: Vec4(1.0, 1.0, 1.0, 1.0))
    tangent: Vec4 = field(default_factory=lambda: Vec4(1.0, 0.0, 0.0, 1.0))
    bone_ids: list[int] = field(default_factory=lambda: [0, 0, 0, 0])
    weights: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 0.0])


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """An axis-aligned bounding box."""

    min: Vec3 = field(default_factory=Vec3)
    max: Vec3 = field(default_factory=Vec3)

    @classmethod
    def empty(cls) -> BoundingBox:
        """A box that any union will replace."""
        return cls(Vec3(FLT_MAX, FLT_MAX, FLT_MAX), Vec3(-FLT_MAX, -FLT_MAX, -FLT_MAX))

    def union(self, other: BoundingBox) -> BoundingBox:
        return BoundingBox(self.min.minimum(other.min), self.max.maximum(other.max))


@dataclass(slots=True)
class Mesh:
    """Vertices, triangle indices and the box that encloses them."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    aabb: BoundingBox = field(default_factory=BoundingBox)
    bone_matrices: list[Matrix] | None = None

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def index_count(self) -> int:
        return len(self.indices)

    def update_bounding_box(self) -> None:
        """Recompute the box from vertex positions; a mesh without vertices is left as is."""
        if not self.vertices:
            return
        low = high = self.vertices[0].position
        for vertex in self.vertices[1:]:
            low = low.minimum(vertex.position)
            high = high.maximum(vertex.position)
        self.aabb = BoundingBox(low, high)

    def triangles(self) -> Iterator[tuple[int, int, int]]:
        """Yield index triples, checking that each index names a vertex."""
        if len(self.indices) % 3:
            raise MeshError(f"index count {len(self.indices)} is not a multiple of 3")
        count = len(self.vertices)
        it = iter(self.indices)
        for triangle in zip(it, it, it):
            bad = next((i for i in triangle if not 0 <= i < count), None)
            if bad is not None:
                raise MeshError(f"invalid vertex index ({bad} >= {count})")
            yield triangle