import numpy as np
import pytest

from deformesh.smoothing import SmootherMLS


def _plane(count=7, spacing=0.01, z=0.5):
    return np.array(
        [(i * spacing, j * spacing, z) for j in range(count) for i in range(count)]
    )


def _cluster(size, seed=0):
    rng = np.random.default_rng(seed)
    return rng.uniform(0.0, 0.1, size=(size, 3))


def test_points_on_plane_stay_in_place():
    cloud = _plane()
    result = SmootherMLS(polynomial_order=2, search_radius=0.03).smooth_point_cloud(cloud)
    assert result.indices == list(range(len(cloud)))
    assert np.allclose(result.points, cloud, atol=1e-9)


def test_noise_is_reduced():
    rng = np.random.default_rng(1)
    cloud = _plane()
    cloud[:, 2] += rng.normal(0.0, 0.001, size=len(cloud))
    result = SmootherMLS(polynomial_order=2, search_radius=0.05).smooth_point_cloud(cloud)
    assert len(result.points) == len(cloud)
    assert np.std(result.points[:, 2]) < np.std(cloud[:, 2])


def test_sparse_points_are_dropped():
    cloud = np.vstack([_plane(), [[5.0, 5.0, 5.0]]])
    result = SmootherMLS(search_radius=0.03).smooth_point_cloud(cloud)
    assert len(cloud) - 1 not in result.indices
    assert len(result.points) == len(result.indices) == len(cloud) - 1


def test_order_zero_fit_keeps_plane():
    cloud = _plane()
    result = SmootherMLS(polynomial_order=0, search_radius=0.03).smooth_point_cloud(cloud)
    assert np.allclose(result.points, cloud, atol=1e-9)


def test_smoothing_empty_cloud():
    result = SmootherMLS().smooth_point_cloud([])
    assert result.indices == []
    assert result.points.shape == (0, 3)


def test_outlier_far_from_cluster_is_removed():
    cloud = np.vstack([_cluster(30), [[50.0, 50.0, 50.0]]])
    kept = SmootherMLS(search_radius=1.0).remove_outliers_radius(cloud)
    assert kept == list(range(30))


def test_twenty_other_neighbours_are_enough():
    kept = SmootherMLS(search_radius=1.0).remove_outliers_radius(_cluster(21))
    assert kept == list(range(21))


def test_nineteen_other_neighbours_are_not_enough():
    kept = SmootherMLS(search_radius=1.0).remove_outliers_radius(_cluster(20))
    assert kept == []


def test_points_must_be_triples():
    with pytest.raises(ValueError):
        SmootherMLS().smooth_point_cloud([[0.0, 1.0], [1.0, 2.0]])


@pytest.mark.parametrize(
    "order, radius",
    [(-1, 0.03), (2, 0.0), (2, -1.0)],
)
def test_invalid_parameters_are_rejected(order, radius):
    with pytest.raises(ValueError):
        SmootherMLS(polynomial_order=order, search_radius=radius)