import math

import pytest

from r3dgeom.mesh import MeshError
from r3dgeom.terrain import BLACK, WHITE, Image, gen_mesh_cubicmap, gen_mesh_heightmap
from r3dgeom.vecmath import Vec3

GREY = (128, 128, 128, 255)


def filled(width, height, color):
    return Image(width, height, [color] * (width * height))


def test_image_pixel_lookup_row_major():
    image = Image(2, 2, [WHITE, BLACK, GREY, WHITE])
    assert image.pixel(1, 0) == BLACK
    assert image.pixel(0, 1) == GREY


def test_image_pixel_out_of_range():
    with pytest.raises(IndexError):
        filled(2, 2, WHITE).pixel(2, 0)


def test_image_rejects_wrong_pixel_count():
    with pytest.raises(ValueError):
        Image(2, 2, [WHITE])


def test_heightmap_counts_and_indices_valid():
    mesh = gen_mesh_heightmap(filled(3, 2, BLACK), Vec3(2.0, 1.0, 1.0))
    assert mesh.vertex_count == 3 * 2
    assert mesh.index_count == (3 - 1) * (2 - 1) * 6
    assert len(list(mesh.triangles())) * 3 == mesh.index_count


def test_heightmap_flat_interior_normal_points_up():
    mesh = gen_mesh_heightmap(filled(3, 3, BLACK), Vec3(2.0, 1.0, 2.0))
    centre = mesh.vertices[4]
    assert centre.normal == Vec3(0.0, 1.0, 0.0)
    assert centre.position.y == 0.0


def test_heightmap_full_red_reaches_size_y():
    mesh = gen_mesh_heightmap(filled(2, 2, WHITE), Vec3(4.0, 3.0, 5.0))
    assert all(math.isclose(v.position.y, 3.0) for v in mesh.vertices)
    assert math.isclose(mesh.aabb.max.y, 3.0)
    assert mesh.aabb.min.x == -2.0
    assert mesh.aabb.max.z == 2.5


def test_heightmap_normals_are_unit_length():
    image = Image(3, 2, [WHITE, GREY, BLACK, BLACK, GREY, WHITE])
    mesh = gen_mesh_heightmap(image, Vec3(1.0, 1.0, 1.0))
    for vertex in mesh.vertices:
        assert math.isclose(vertex.normal.length(), 1.0)


@pytest.mark.parametrize("width,height,size", [
    (1, 2, Vec3(1.0, 1.0, 1.0)),
    (2, 1, Vec3(1.0, 1.0, 1.0)),
    (2, 2, Vec3(0.0, 1.0, 1.0)),
    (2, 2, Vec3(1.0, -1.0, 1.0)),
])
def test_heightmap_invalid(width, height, size):
    with pytest.raises(MeshError):
        gen_mesh_heightmap(filled(width, height, BLACK), size)


def test_cubicmap_single_white_cell_is_full_cube():
    mesh = gen_mesh_cubicmap(filled(1, 1, WHITE), Vec3(1.0, 1.0, 1.0))
    assert mesh.vertex_count == 24
    assert mesh.index_count == 36
    normals = {v.normal for v in mesh.vertices}
    assert len(normals) == 6


def test_cubicmap_white_box_matches_vertices():
    mesh = gen_mesh_cubicmap(filled(1, 1, WHITE), Vec3(2.0, 3.0, 4.0))
    declared = mesh.aabb
    mesh.update_bounding_box()
    assert mesh.aabb == declared
    assert declared.max.y == 3.0


def test_cubicmap_black_cell_has_floor_and_ceiling():
    mesh = gen_mesh_cubicmap(filled(1, 1, BLACK), Vec3(1.0, 2.0, 1.0))
    assert mesh.vertex_count == 8
    heights = {v.position.y for v in mesh.vertices}
    assert heights == {0.0, 2.0}


def test_cubicmap_other_colours_are_empty():
    mesh = gen_mesh_cubicmap(filled(2, 2, GREY), Vec3(1.0, 1.0, 1.0))
    assert mesh.vertex_count == 0
    assert mesh.index_count == 0


def test_cubicmap_culls_shared_wall():
    single = gen_mesh_cubicmap(filled(1, 1, WHITE), Vec3(1.0, 1.0, 1.0))
    pair = gen_mesh_cubicmap(filled(2, 1, WHITE), Vec3(1.0, 1.0, 1.0))
    assert pair.vertex_count < 2 * single.vertex_count
    right_x = {v.position.x for v in pair.vertices if v.normal == Vec3(1.0, 0.0, 0.0)}
    assert right_x == {pair.aabb.max.x}


def test_cubicmap_indices_valid():
    image = Image(2, 2, [WHITE, BLACK, BLACK, WHITE])
    mesh = gen_mesh_cubicmap(image, Vec3(1.0, 1.0, 1.0))
    assert len(list(mesh.triangles())) * 3 == mesh.index_count


def test_cubicmap_invalid_size():
    with pytest.raises(MeshError):
        gen_mesh_cubicmap(filled(1, 1, WHITE), Vec3(1.0, 0.0, 1.0))