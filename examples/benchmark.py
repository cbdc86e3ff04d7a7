from geotransform import Transform, Plane, PLANE_XY, get_yaw_pitch_roll, get_rotation_axis
import timeit
import numpy as np

if __name__ == "__main__":
    N = 100_000
    plane = Plane([5, 0, 0], [-10, -15, 0])
    center = np.array([5, 5, 0], dtype=np.float64)

    # warm up the compiled kernels
    Transform.plane_to_plane(PLANE_XY, plane)
    t = Transform.rotation(0.5, center)

    # factories
    print("identity:          ", timeit.timeit(lambda: Transform.identity(), number=N))
    print("translation:       ", timeit.timeit(
        lambda: Transform.translation(center), number=N))
    print("rotation:          ", timeit.timeit(
        lambda: Transform.rotation(0.5, center), number=N))
    print("scale:             ", timeit.timeit(
        lambda: Transform.scale(center, 0.5), number=N))
    print("reflection:        ", timeit.timeit(
        lambda: Transform.reflection(plane), number=N))
    print("planar_projection: ", timeit.timeit(
        lambda: Transform.planar_projection(plane), number=N))
    print("plane_to_plane:    ", timeit.timeit(
        lambda: Transform.plane_to_plane(PLANE_XY, plane), number=N))

    # composition and application
    print("compose (t @ t):   ", timeit.timeit(lambda: t @ t, number=N))
    print("transform_point:   ", timeit.timeit(
        lambda: t.transform_point(center), number=N))
    print("copy:              ", timeit.timeit(lambda: t.copy(), number=N))

    # decomposition
    print("yaw_pitch_roll:    ", timeit.timeit(
        lambda: get_yaw_pitch_roll(t), number=N))
    print("rotation_axis:     ", timeit.timeit(
        lambda: get_rotation_axis(t), number=N))
