import math

import pytest

from r3dgeom.vecmath import (
    Matrix,
    Quat,
    Vec3,
    identity_matrix,
    scale_matrix,
    slerp,
    translate_matrix,
)


def _approx_vec(v):
    return pytest.approx(tuple(v), abs=1e-9)


def test_cross_of_axes():
    assert Vec3(1.0, 0.0, 0.0).cross(Vec3(0.0, 1.0, 0.0)) == Vec3(0.0, 0.0, 1.0)


def test_cross_is_perpendicular():
    a, b = Vec3(1.5, -2.0, 0.5), Vec3(0.25, 3.0, -1.0)
    c = a.cross(b)
    assert c.dot(a) == pytest.approx(0.0, abs=1e-9)
    assert c.dot(b) == pytest.approx(0.0, abs=1e-9)


def test_min_max_componentwise():
    a, b = Vec3(1.0, 5.0, -2.0), Vec3(3.0, -4.0, 0.0)
    assert a.minimum(b) == Vec3(1.0, -4.0, -2.0)
    assert a.maximum(b) == Vec3(3.0, 5.0, 0.0)


def test_normalized_has_unit_length():
    assert Vec3(3.0, -7.0, 2.0).normalized().length() == pytest.approx(1.0)


def test_normalized_zero_vector_unchanged():
    assert Vec3().normalized() == Vec3()


def test_lerp_endpoints():
    a, b = Vec3(1.0, 2.0, 3.0), Vec3(-4.0, 8.0, 0.5)
    assert a.lerp(b, 0.0) == a
    assert tuple(a.lerp(b, 1.0)) == _approx_vec(b)
    mid = a.lerp(b, 0.5)
    assert (mid - a).length() == pytest.approx((b - mid).length())


def test_identity_quaternion_gives_identity_matrix():
    assert Quat().to_matrix().is_identity()


def test_quaternion_rotates_x_to_y():
    half = math.pi / 4
    q = Quat(0.0, 0.0, math.sin(half), math.cos(half))
    rotated = q.to_matrix().transform_point(Vec3(1.0, 0.0, 0.0))
    assert tuple(rotated) == _approx_vec((0.0, 1.0, 0.0))


def test_slerp_endpoints():
    q1 = Quat()
    q2 = Quat(0.0, math.sin(0.6), 0.0, math.cos(0.6))
    assert slerp(q1, q2, 0.0) == pytest.approx(q1)
    assert tuple(slerp(q1, q2, 1.0)) == pytest.approx(tuple(q2), abs=1e-9)


def test_slerp_stays_unit_length():
    q1 = Quat()
    q2 = Quat(math.sin(1.2), 0.0, 0.0, math.cos(1.2))
    for t in (0.1, 0.33, 0.5, 0.9):
        assert slerp(q1, q2, t).length() == pytest.approx(1.0)


def test_slerp_with_negated_quaternion_returns_first():
    q = Quat(0.0, math.sin(0.3), 0.0, math.cos(0.3))
    assert slerp(q, -q, 0.5) == q


def test_multiply_by_identity():
    m = translate_matrix(1.0, 2.0, 3.0)
    assert m.multiply(identity_matrix()) == m
    assert identity_matrix().multiply(m) == m


def test_translations_compose():
    combined = translate_matrix(1.0, 2.0, 3.0).multiply(translate_matrix(4.0, 5.0, 6.0))
    assert combined == translate_matrix(1.0 + 4.0, 2.0 + 5.0, 3.0 + 6.0)


def test_multiply_applies_self_first():
    scale = scale_matrix(2.0, 2.0, 2.0)
    move = translate_matrix(1.0, 2.0, 3.0)
    p = Vec3(1.0, 1.0, 1.0)
    composed = scale.multiply(move).transform_point(p)
    assert tuple(composed) == _approx_vec(move.transform_point(scale.transform_point(p)))


def test_translate_places_offset_in_last_column():
    m = translate_matrix(7.0, -8.0, 9.5)
    assert (m[0][3], m[1][3], m[2][3]) == (7.0, -8.0, 9.5)
    assert not m.is_identity()


def test_matrix_shape_is_checked():
    with pytest.raises(ValueError):
        Matrix(((1.0, 0.0), (0.0, 1.0)))