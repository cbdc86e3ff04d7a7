import unittest
import numpy as np
from geotransform import (
    Transform,
    Plane,
    PLANE_XY,
    PLANE_YZ,
    PLANE_ZX,
    DegenerateGeometryError,
)
from geotransform.linalg import determinant


def _sample_planes():
    return [
        PLANE_XY,
        PLANE_YZ,
        PLANE_ZX,
        Plane([5, 0, 0], [-10, -15, 0]),
        Plane([1, -2, 3], [0.3, -0.4, 2.0]),
        Plane([-4, 7, 0.5], [0, 0, -3]),
    ]


class TestTransformMethods(unittest.TestCase):
    def setUp(self):
        # identity transform for reuse
        self.I = Transform.identity()

    def test_transform_point_identity(self):
        # both ndarray and list inputs should pass through unchanged
        for p in (np.array([1.0, 2.0, 3.0]), [4, 5, 6], (0, 0, 0)):
            np.testing.assert_allclose(self.I.transform_point(p), np.asarray(p, dtype=float), atol=1e-12)

    def test_transform_point_translation(self):
        t = Transform.translation([1, -2, 3])
        np.testing.assert_allclose(t.transform_point([5, 5, 5]), [6, 3, 8], atol=1e-12)

    def test_transform_vector_translation_ignored(self):
        t = Transform.translation([1, 2, 3])
        np.testing.assert_allclose(t.transform_vector([7, 8, 9]), [7, 8, 9], atol=1e-12)

    def test_transform_point_scale_about_center(self):
        t = Transform.scale([10, 10, 0], 0.5)
        np.testing.assert_allclose(t.transform_point([10, 10, 0]), [10, 10, 0], atol=1e-12)
        np.testing.assert_allclose(t.transform_point([20, 10, 0]), [15, 10, 0], atol=1e-12)

    def test_reflection_mirrors_points(self):
        t = Transform.reflection(Plane([10, 10, 0], [1, 0, 0]))
        np.testing.assert_allclose(t.transform_point([12, 3, 4]), [8, 3, 4], atol=1e-12)
        np.testing.assert_allclose(t.transform_point([10, -1, 2]), [10, -1, 2], atol=1e-12)

    def test_projection_lands_on_plane(self):
        for plane in _sample_planes():
            t = Transform.planar_projection(plane)
            for p in ([1, 2, 3], [-7, 0.5, 11], [0, 0, 0]):
                q = t.transform_point(p)
                self.assertAlmostEqual(plane.signed_distance(q), 0.0, delta=1e-9)
                np.testing.assert_allclose(q, plane.closest_point(p), atol=1e-9)

    def test_projection_collapses_normal_offsets(self):
        plane = Plane([5, 0, 0], [-10, -15, 0])
        t = Transform.planar_projection(plane)
        p = np.array([3.0, -1.0, 2.0])
        np.testing.assert_allclose(
            t.transform_point(p),
            t.transform_point(p + 4.0 * plane.unit_normal),
            atol=1e-9,
        )

    def test_is_affine(self):
        self.assertTrue(Transform.reflection(PLANE_ZX).is_affine())
        t = Transform.identity()
        t[3] = [0, 0, 1, 0]
        self.assertFalse(t.is_affine())

    def test_inverse(self):
        t = Transform.translation([1, 2, 3]) @ Transform.rotation_about_axis(0.7, [1, 2, 3]) @ Transform.scale([0, 1, 0], 2.0)
        inv = t.inverse()
        self.assertIsInstance(inv, Transform)
        self.assertTrue((inv @ t).is_close(Transform.identity(), tol=1e-9))
        np.testing.assert_allclose(inv.matrix, np.linalg.inv(t.matrix), atol=1e-9)

    def test_inverse_of_projection_raises(self):
        with self.assertRaises(DegenerateGeometryError):
            Transform.planar_projection(PLANE_XY).inverse()


class TestTransformAlgebra(unittest.TestCase):
    def setUp(self):
        self.samples = [
            Transform.identity(),
            Transform.translation([3, -4, 5]),
            Transform.rotation(1.1, [2, 2, 0]),
            Transform.rotation_about_axis(-0.4, [1, -1, 2], center=[0, 3, 1]),
            Transform.scale([1, 1, 1], 3.0),
            Transform.reflection(Plane([0, 1, 0], [1, 1, 1])),
        ]

    def test_identity_is_two_sided(self):
        I = Transform.identity()
        for t in self.samples:
            self.assertEqual(I @ t, t)
            self.assertEqual(t @ I, t)

    def test_composition_is_associative(self):
        a, b, c = self.samples[1], self.samples[2], self.samples[3]
        self.assertTrue(((a @ b) @ c).is_close(a @ (b @ c), tol=1e-9))

    def test_composition_is_not_commutative(self):
        a = Transform.translation([1, 0, 0])
        b = Transform.rotation(0.5)
        self.assertFalse((a @ b).is_close(b @ a))

    def test_translation_cancels(self):
        v = np.array([10.0, -3.5, 0.25])
        self.assertEqual(Transform.translation(v) @ Transform.translation(-v), Transform.identity())

    def test_factories_are_affine(self):
        for t in self.samples:
            np.testing.assert_array_equal(t.matrix[3, :], [0, 0, 0, 1])
            self.assertTrue(t.is_affine())

    def test_projection_is_idempotent(self):
        for plane in _sample_planes():
            p = Transform.planar_projection(plane)
            self.assertTrue((p @ p).is_close(p, tol=1e-9))

    def test_reflection_is_an_involution(self):
        for plane in _sample_planes():
            r = Transform.reflection(plane)
            self.assertTrue((r @ r).is_close(Transform.identity(), tol=1e-9))

    def test_determinants(self):
        for angle in (0.1, 1.0, 2.5, -3.0):
            t = Transform.rotation_about_axis(angle, [0.2, -1.0, 0.7], center=[1, 2, 3])
            self.assertAlmostEqual(t.determinant(), 1.0, delta=1e-9)
        for plane in _sample_planes():
            self.assertAlmostEqual(Transform.reflection(plane).determinant(), -1.0, delta=1e-9)
            self.assertAlmostEqual(determinant(Transform.planar_projection(plane)), 0.0, delta=1e-9)
        self.assertAlmostEqual(Transform.scale([4, 5, 6], 0.5).determinant(), 0.125, delta=1e-12)

    def test_plane_to_same_plane_is_identity(self):
        for plane in _sample_planes():
            t = Transform.plane_to_plane(plane, plane)
            self.assertTrue(t.is_close(Transform.identity(), tol=1e-9))

    def test_plane_to_plane_maps_origin_and_normal(self):
        planes = _sample_planes()
        for a in planes:
            for b in planes:
                t = Transform.plane_to_plane(a, b)
                np.testing.assert_allclose(t.transform_point(a.origin), b.origin, atol=1e-9)
                np.testing.assert_allclose(
                    t.transform_point(a.origin + a.unit_normal),
                    b.origin + b.unit_normal,
                    atol=1e-9,
                )
                self.assertAlmostEqual(t.determinant(), 1.0, delta=1e-9)

    def test_plane_to_plane_maps_frames(self):
        a = Plane([1, -2, 3], [0.3, -0.4, 2.0])
        b = Plane([5, 0, 0], [-10, -15, 0])
        t = Transform.plane_to_plane(a, b)
        np.testing.assert_allclose(t.transform_vector(a.x_axis), b.x_axis, atol=1e-9)
        np.testing.assert_allclose(t.transform_vector(a.y_axis), b.y_axis, atol=1e-9)


if __name__ == "__main__":
    unittest.main()
