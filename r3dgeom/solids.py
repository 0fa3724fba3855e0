"""Cylinder and cone mesh generators (+Y up, -Z forward)."""

from __future__ import annotations

import math

from .mesh import BoundingBox, Mesh, MeshError, Vertex
from .vecmath import Vec2, Vec3, Vec4

_WHITE = Vec4(1.0, 1.0, 1.0, 1.0)
_FLAT_TANGENT = Vec4(1.0, 0.0, 0.0, 1.0)


def _disc_perimeter(radius: float, y: float, slices: int, normal: Vec3) -> list[Vertex]:
    """Edge vertices of a flat disc at height ``y`` with circular UV mapping."""
    step = 2.0 * math.pi / slices
    vertices = []
    for slice_ in range(slices):
        theta = slice_ * step
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        vertices.append(Vertex(
            Vec3(radius * cos_t, y, -radius * sin_t),
            Vec2(0.5 + 0.5 * cos_t, 0.5 - 0.5 * sin_t),
            normal,
            _WHITE,
            _FLAT_TANGENT,
        ))
    return vertices


def _fan(center: int, slices: int, reverse: bool) -> list[int]:
    """Triangle fan around ``center`` over the ``slices`` vertices that follow it."""
    start = center + 1
    indices: list[int] = []
    for slice_ in range(slices):
        current = start + slice_
        nxt = start + (slice_ + 1) % slices
        indices.extend((center, nxt, current) if reverse else (center, current, nxt))
    return indices


def gen_mesh_cylinder(radius: float, height: float, slices: int) -> Mesh:
    """A capped cylinder centred on the origin along the Y axis."""
    if radius <= 0.0 or height <= 0.0 or slices < 3:
        raise MeshError(
            f"a cylinder needs a positive radius and height and 3+ slices, got {radius}, {height}, {slices}"
        )

    half = height * 0.5
    step = 2.0 * math.pi / slices
    vertices: list[Vertex] = []

    for y, v in ((-half, 0.0), (half, 1.0)):
        for slice_ in range(slices + 1):
            theta = slice_ * step
            cos_t, sin_t = math.cos(theta), math.sin(theta)
            vertices.append(Vertex(
                Vec3(radius * cos_t, y, -radius * sin_t),
                Vec2(slice_ / slices, v),
                Vec3(cos_t, 0.0, -sin_t),
                _WHITE,
                Vec4(-sin_t, 0.0, -cos_t, 1.0),
            ))

    down = Vec3(0.0, -1.0, 0.0)
    bottom_center = len(vertices)
    vertices.append(Vertex(Vec3(0.0, -half, 0.0), Vec2(0.5, 0.5), down, _WHITE, _FLAT_TANGENT))
    vertices.extend(_disc_perimeter(radius, -half, slices, down))

    up = Vec3(0.0, 1.0, 0.0)
    top_center = len(vertices)
    vertices.append(Vertex(Vec3(0.0, half, 0.0), Vec2(0.5, 0.5), up, _WHITE, _FLAT_TANGENT))
    vertices.extend(_disc_perimeter(radius, half, slices, up))

    per_row = slices + 1
    indices: list[int] = []
    for slice_ in range(slices):
        bottom_left, bottom_right = slice_, slice_ + 1
        top_left, top_right = per_row + slice_, per_row + slice_ + 1
        indices.extend((bottom_left, bottom_right, top_right))
        indices.extend((bottom_left, top_right, top_left))

    indices.extend(_fan(bottom_center, slices, reverse=True))
    indices.extend(_fan(top_center, slices, reverse=False))

    aabb = BoundingBox(Vec3(-radius, -half, -radius), Vec3(radius, half, radius))
    return Mesh(vertices, indices, aabb)


def gen_mesh_cone(radius: float, height: float, slices: int) -> Mesh:
    """A cone with its base at -height/2 and its tip at +height/2."""
    if radius <= 0.0 or height <= 0.0 or slices < 3:
        raise MeshError(
            f"a cone needs a positive radius and height and 3+ slices, got {radius}, {height}, {slices}"
        )

    half = height * 0.5
    step = 2.0 * math.pi / slices
    vertices: list[Vertex] = []

    for slice_ in range(slices + 1):
        theta = slice_ * step
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        vertices.append(Vertex(
            Vec3(radius * cos_t, -half, -radius * sin_t),
            Vec2(slice_ / slices, 0.0),
            Vec3(cos_t, radius / height, -sin_t).normalized(),
            _WHITE,
            Vec4(-sin_t, 0.0, -cos_t, 1.0),
        ))

    tip = len(vertices)
    vertices.append(Vertex(
        Vec3(0.0, half, 0.0), Vec2(0.5, 1.0), Vec3(0.0, 1.0, 0.0), _WHITE, _FLAT_TANGENT
    ))

    down = Vec3(0.0, -1.0, 0.0)
    base_center = len(vertices)
    vertices.append(Vertex(Vec3(0.0, -half, 0.0), Vec2(0.5, 0.5), down, _WHITE, _FLAT_TANGENT))
    vertices.extend(_disc_perimeter(radius, -half, slices, down))

    indices: list[int] = []
    for slice_ in range(slices):
        indices.extend((slice_, slice_ + 1, tip))
    indices.extend(_fan(base_center, slices, reverse=True))

    aabb = BoundingBox(Vec3(-radius, -half, -radius), Vec3(radius, half, radius))
    return Mesh(vertices, indices, aabb)