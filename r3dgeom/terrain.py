"""Mesh generators driven by images: heightmap terrain and cubic-map mazes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from .mesh import FLT_MAX, BoundingBox, Mesh, MeshError, Vertex
from .vecmath import Vec2, Vec3, Vec4

Color = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)

_WHITE_F = Vec4(1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True, slots=True)
class Image:
    """An RGBA image with 8-bit channels, stored row by row."""

    width: int
    height: int
    pixels: tuple[Color, ...]

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"image size cannot be negative, got {self.width}x{self.height}")
        pixels = tuple(tuple(int(channel) for channel in pixel) for pixel in self.pixels)
        if any(len(pixel) != 4 for pixel in pixels):
            raise ValueError("every pixel needs exactly 4 channels (RGBA)")
        if len(pixels) != self.width * self.height:
            raise ValueError(
                f"a {self.width}x{self.height} image needs {self.width * self.height} pixels, "
                f"got {len(pixels)}"
            )
        object.__setattr__(self, "pixels", pixels)

    def pixel(self, x: int, y: int) -> Color:
        """The RGBA colour at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside a {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]


def gen_mesh_heightmap(heightmap: Image, size: Vec3) -> Mesh:
    """A terrain grid whose heights come from the red channel of ``heightmap``."""
    width, depth = heightmap.width, heightmap.height
    if width <= 1 or depth <= 1 or size.x <= 0.0 or size.y <= 0.0 or size.z <= 0.0:
        raise MeshError(
            f"a heightmap needs at least 2x2 pixels and a positive size, got {width}x{depth}, {size}"
        )

    def height_at(x: int, z: int) -> float:
        if not (0 <= x < width and 0 <= z < depth):
            return 0.0
        return heightmap.pixel(x, z)[0] / 255

    half_x = size.x * 0.5
    half_z = size.z * 0.5
    step_x = size.x / (width - 1)
    step_z = size.z / (depth - 1)
    step_u = 1.0 / (width - 1)
    step_v = 1.0 / (depth - 1)

    vertices: list[Vertex] = []
    min_y, max_y = FLT_MAX, -FLT_MAX

    for z in range(depth):
        for x in range(width):
            pos_y = height_at(x, z) * size.y
            min_y = min(min_y, pos_y)
            max_y = max(max_y, pos_y)

            grad_x = (height_at(x + 1, z) - height_at(x - 1, z)) / (2.0 * step_x)
            grad_z = (height_at(x, z + 1) - height_at(x, z - 1)) / (2.0 * step_z)
            tangent = Vec3(1.0, grad_x, 0.0).normalized()

            vertices.append(Vertex(
                Vec3(-half_x + x * step_x, pos_y, -half_z + z * step_z),
                Vec2(x * step_u, z * step_v),
                Vec3(-grad_x, 1.0, -grad_z).normalized(),
                _WHITE_F,
                Vec4(tangent.x, tangent.y, tangent.z, 1.0),
            ))

    indices: list[int] = []
    for z in range(depth - 1):
        for x in range(width - 1):
            top_left = z * width + x
            top_right = top_left + 1
            bottom_left = (z + 1) * width + x
            bottom_right = bottom_left + 1
            indices.extend((top_left, bottom_left, top_right))
            indices.extend((top_right, bottom_left, bottom_right))

    aabb = BoundingBox(Vec3(-half_x, min_y, -half_z), Vec3(half_x, max_y, half_z))
    return Mesh(vertices, indices, aabb)


_NORMALS = (
    Vec3(1.0, 0.0, 0.0),
    Vec3(-1.0, 0.0, 0.0),
    Vec3(0.0, 1.0, 0.0),
    Vec3(0.0, -1.0, 0.0),
    Vec3(0.0, 0.0, -1.0),
    Vec3(0.0, 0.0, 1.0),
)

_TANGENTS = (
    Vec4(0.0, 0.0, -1.0, 1.0),
    Vec4(0.0, 0.0, 1.0, 1.0),
    Vec4(1.0, 0.0, 0.0, 1.0),
    Vec4(1.0, 0.0, 0.0, 1.0),
    Vec4(-1.0, 0.0, 0.0, 1.0),
    Vec4(1.0, 0.0, 0.0, 1.0),
)

# Atlas rectangles (x, y, width, height) for the face textures.
_ATLAS = (
    (0.0, 0.0, 0.5, 0.5),
    (0.5, 0.0, 0.5, 0.5),
    (0.0, 0.5, 0.5, 0.5),
    (0.5, 0.5, 0.5, 0.5),
    (0.5, 0.0, 0.5, 0.5),
    (0.0, 0.0, 0.5, 0.5),
)

_PATTERN_A = (0, 1, 2, 2, 3, 0)
_PATTERN_B = (0, 1, 2, 0, 3, 1)
_PATTERN_C = (0, 1, 2, 2, 1, 3)


class _Face(NamedTuple):
    rect: int
    uv_corners: tuple[tuple[int, int], ...]
    # Each corner: (x sign, on top, z sign).
    corners: tuple[tuple[int, bool, int], ...]
    orientation: int
    pattern: tuple[int, ...]


_UP = _Face(2, ((0, 0), (0, 1), (1, 1), (1, 0)),
            ((-1, True, -1), (-1, True, 1), (1, True, 1), (1, True, -1)), 2, _PATTERN_A)
_DOWN = _Face(3, ((1, 0), (0, 1), (1, 1), (0, 0)),
              ((-1, False, -1), (1, False, 1), (-1, False, 1), (1, False, -1)), 3, _PATTERN_B)
_BACK = _Face(5, ((0, 0), (0, 1), (1, 0), (1, 1)),
              ((-1, True, 1), (-1, False, 1), (1, True, 1), (1, False, 1)), 5, _PATTERN_C)
_FRONT = _Face(4, ((1, 0), (0, 1), (1, 1), (0, 0)),
               ((1, True, -1), (-1, False, -1), (1, False, -1), (-1, True, -1)), 4, _PATTERN_B)
_RIGHT = _Face(0, ((0, 0), (0, 1), (1, 0), (1, 1)),
               ((1, True, 1), (1, False, 1), (1, True, -1), (1, False, -1)), 0, _PATTERN_C)
_LEFT = _Face(1, ((0, 0), (1, 1), (1, 0), (0, 1)),
              ((-1, True, -1), (-1, False, 1), (-1, True, 1), (-1, False, -1)), 1, _PATTERN_B)
_CEILING = _Face(2, ((0, 0), (1, 1), (0, 1), (1, 0)),
                 ((-1, True, -1), (1, True, 1), (-1, True, 1), (1, True, -1)), 3, _PATTERN_B)
_GROUND = _Face(3, ((1, 0), (1, 1), (0, 1), (0, 0)),
                ((-1, False, -1), (-1, False, 1), (1, False, 1), (1, False, -1)), 2, _PATTERN_A)

# Side faces with the neighbour offset (dx, dz) that hides them.
_SIDES = ((_BACK, 0, 1), (_FRONT, 0, -1), (_RIGHT, 1, 0), (_LEFT, -1, 0))


def gen_mesh_cubicmap(cubicmap: Image, cube_size: Vec3) -> Mesh:
    """Walls for white pixels and floor plus ceiling for black pixels; other colours are empty."""
    if (cubicmap.width <= 0 or cubicmap.height <= 0
            or cube_size.x <= 0.0 or cube_size.y <= 0.0 or cube_size.z <= 0.0):
        raise MeshError(
            f"a cubic map needs a non-empty image and a positive cube size, "
            f"got {cubicmap.width}x{cubicmap.height}, {cube_size}"
        )

    half_w = cube_size.x * 0.5
    half_l = cube_size.z * 0.5
    vertices: list[Vertex] = []
    indices: list[int] = []

    def emit(face: _Face, pos_x: float, pos_z: float) -> None:
        rx, ry, rw, rh = _ATLAS[face.rect]
        normal = _NORMALS[face.orientation]
        tangent = _TANGENTS[face.orientation]
        base = len(vertices)
        for (sx, top, sz), (ou, ov) in zip(face.corners, face.uv_corners):
            vertices.append(Vertex(
                Vec3(pos_x + sx * half_w, cube_size.y if top else 0.0, pos_z + sz * half_l),
                Vec2(rx + ou * rw, ry + ov * rh),
                normal,
                _WHITE_F,
                tangent,
            ))
        indices.extend(base + offset for offset in face.pattern)

    def is_white(x: int, z: int) -> bool:
        return cubicmap.pixel(x, z) == WHITE

    min_x = min_y = min_z = FLT_MAX
    max_x = max_y = max_z = -FLT_MAX

    for z in range(cubicmap.height):
        for x in range(cubicmap.width):
            pixel = cubicmap.pixel(x, z)
            pos_x = cube_size.x * (x - cubicmap.width * 0.5 + 0.5)
            pos_z = cube_size.z * (z - cubicmap.height * 0.5 + 0.5)

            min_x = min(min_x, pos_x - half_w)
            max_x = max(max_x, pos_x + half_w)
            min_z = min(min_z, pos_z - half_l)
            max_z = max(max_z, pos_z + half_l)

            if pixel == WHITE:
                min_y = min(min_y, 0.0)
                max_y = max(max_y, cube_size.y)
                emit(_UP, pos_x, pos_z)
                emit(_DOWN, pos_x, pos_z)
                for face, dx, dz in _SIDES:
                    nx, nz = x + dx, z + dz
                    inside = 0 <= nx < cubicmap.width and 0 <= nz < cubicmap.height
                    if not inside or not is_white(nx, nz):
                        emit(face, pos_x, pos_z)
            elif pixel == BLACK:
                min_y = min(min_y, 0.0)
                max_y = max(max_y, cube_size.y)
                emit(_CEILING, pos_x, pos_z)
                emit(_GROUND, pos_x, pos_z)

    aabb = BoundingBox(Vec3(min_x, min_y, min_z), Vec3(max_x, max_y, max_z))
    return Mesh(vertices, indices, aabb)