import unittest
import numpy as np
from geotransform import X_AXIS, Y_AXIS, Z_AXIS, DegenerateGeometryError, InvalidDimensionError
from geotransform.vector import as_vector, is_parallel, magnitude, normalize


class TestVectorHelpers(unittest.TestCase):
    def test_as_vector(self):
        v = as_vector((1, 2, 3))
        self.assertEqual(v.dtype, np.float64)
        np.testing.assert_array_equal(v, [1.0, 2.0, 3.0])
        for bad in ([1, 2], [1, 2, 3, 4], [[1, 2, 3]], 5.0):
            with self.assertRaises(InvalidDimensionError):
                as_vector(bad)

    def test_magnitude_and_normalize(self):
        self.assertAlmostEqual(magnitude([3, 4, 0]), 5.0)
        np.testing.assert_allclose(normalize([0, 0, -7]), [0, 0, -1], atol=1e-12)

    def test_normalize_degenerate_raises(self):
        with self.assertRaises(DegenerateGeometryError):
            normalize([0, 0, 0])
        with self.assertRaises(DegenerateGeometryError):
            normalize([1e-3, 0, 0], tol=1e-2)
        for bad in ([float("nan"), 0, 0], [0, 0, float("inf")], [float("-inf"), 1, 1]):
            with self.assertRaises(DegenerateGeometryError):
                normalize(bad)

    def test_is_parallel(self):
        self.assertTrue(is_parallel([0, 0, 2], Z_AXIS))
        self.assertTrue(is_parallel([0, 0, -2], Z_AXIS))
        self.assertFalse(is_parallel(X_AXIS, Y_AXIS))
        self.assertFalse(is_parallel([0, 0, 0], Z_AXIS))
        self.assertFalse(is_parallel([0, 0, float("nan")], Z_AXIS))
        self.assertFalse(is_parallel(Z_AXIS, [0, 0, float("inf")]))

    def test_axes_are_read_only(self):
        with self.assertRaises(ValueError):
            X_AXIS[0] = 2.0


if __name__ == "__main__":
    unittest.main()
