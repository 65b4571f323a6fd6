import numpy as np
import pytest

from deformesh.normals import estimate_normals


def _plane(z=1.0, count=5, spacing=0.1):
    return np.array(
        [(i * spacing, j * spacing, z) for j in range(count) for i in range(count)]
    )


def test_plane_normals_point_towards_origin():
    normals = estimate_normals(_plane())
    assert normals.shape == (25, 3)
    assert np.allclose(normals, [0.0, 0.0, -1.0], atol=1e-9)


def test_flat_input_matches_nested_input():
    cloud = _plane()
    assert np.allclose(estimate_normals(cloud.ravel().tolist()), estimate_normals(cloud))


def test_tilted_plane_normals_are_unit_and_face_viewpoint():
    base = _plane(z=0.0)
    cloud = base + np.array([0.0, 0.0, 2.0]) + base[:, [0]] * np.array([0.0, 0.0, 1.0])
    normals = estimate_normals(cloud)
    assert np.allclose(np.linalg.norm(normals, axis=1), 1.0)
    assert np.all(np.einsum("ij,ij->i", -cloud, normals) >= 0)
    offsets = cloud - cloud[0]
    assert np.allclose(offsets @ normals[0], 0.0, atol=1e-9)


def test_isolated_points_get_nan():
    cloud = np.vstack([_plane(), [[10.0, 10.0, 10.0]]])
    normals = estimate_normals(cloud, radius=0.3)
    assert normals.shape == (26, 3)
    assert np.isnan(normals[-1]).tolist() == [True, True, True]
    assert np.allclose(normals[:-1], [0.0, 0.0, -1.0], atol=1e-9)


def test_non_finite_point_gets_nan():
    cloud = np.vstack([_plane(), [[np.nan, 0.0, 1.0]]])
    normals = estimate_normals(cloud)
    assert np.all(np.isnan(normals[-1]))
    assert np.allclose(normals[:-1], [0.0, 0.0, -1.0], atol=1e-9)


def test_empty_cloud_gives_empty_result():
    assert estimate_normals([]).shape == (0, 3)


def test_flat_input_must_be_multiple_of_three():
    with pytest.raises(ValueError):
        estimate_normals([0.0, 1.0, 2.0, 3.0])


def test_radius_must_be_positive():
    with pytest.raises(ValueError):
        estimate_normals(_plane(), radius=0.0)