import pytest

from r3dgeom.mesh import BoundingBox, Mesh, MeshError, Vertex
from r3dgeom.vecmath import Vec3


def _mesh(points, indices=()):
    return Mesh(vertices=[Vertex(position=Vec3(*p)) for p in points], indices=list(indices))


def test_update_bounding_box_covers_all_vertices():
    points = [(1.0, -2.0, 3.0), (-4.0, 5.0, 0.5), (2.5, 0.0, -6.0)]
    mesh = _mesh(points)
    mesh.update_bounding_box()
    assert mesh.aabb.min == Vec3(-4.0, -2.0, -6.0)
    assert mesh.aabb.max == Vec3(2.5, 5.0, 3.0)


def test_update_bounding_box_single_vertex():
    mesh = _mesh([(1.0, 2.0, 3.0)])
    mesh.update_bounding_box()
    assert mesh.aabb.min == mesh.aabb.max == Vec3(1.0, 2.0, 3.0)


def test_update_bounding_box_empty_mesh_unchanged():
    box = BoundingBox(Vec3(-1.0, -1.0, -1.0), Vec3(1.0, 1.0, 1.0))
    mesh = Mesh(aabb=box)
    mesh.update_bounding_box()
    assert mesh.aabb == box


def test_union_encloses_both():
    a = BoundingBox(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0))
    b = BoundingBox(Vec3(-2.0, 0.5, 0.5), Vec3(0.5, 3.0, 0.75))
    u = a.union(b)
    assert u.min == Vec3(-2.0, 0.0, 0.0)
    assert u.max == Vec3(1.0, 3.0, 1.0)


def test_empty_box_is_neutral_for_union():
    box = BoundingBox(Vec3(-1.0, 2.0, -3.0), Vec3(4.0, 5.0, 6.0))
    assert BoundingBox.empty().union(box) == box


def test_triangles_yield_index_triples():
    mesh = _mesh([(0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0)], [0, 1, 2, 2, 1, 3])
    assert list(mesh.triangles()) == [(0, 1, 2), (2, 1, 3)]
    assert mesh.vertex_count == 4
    assert mesh.index_count == 6


def test_triangles_reject_partial_triangle():
    mesh = _mesh([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [0, 1])
    with pytest.raises(MeshError):
        list(mesh.triangles())


def test_triangles_reject_out_of_range_index():
    mesh = _mesh([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [0, 1, 3])
    with pytest.raises(MeshError):
        list(mesh.triangles())


def test_vertex_defaults():
    vertex = Vertex()
    assert vertex.weights == [0.0, 0.0, 0.0, 0.0]
    assert vertex.bone_ids == [0, 0, 0, 0]
    other = Vertex()
    other.weights[0] = 1.0
    assert vertex.weights[0] == 0.0