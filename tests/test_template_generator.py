import numpy as np
import pytest

from deformesh.laplacian_mesh import LaplacianMesh
from deformesh.template_generator import create_laplacian_mesh, load_laplacian_mesh
from deformesh.triangular_mesh import regular_triangulation


def _grid(rows=3, cols=3):
    return [(float(i), float(j), 0.0) for j in range(cols) for i in range(rows)]


def _centre(mesh):
    return next(node for node in mesh.nodes if node.index == 4)


def test_load_drops_last_vertex_row():
    vertices = _grid() + [(99.0, 99.0, 99.0)]
    mesh = load_laplacian_mesh(vertices, regular_triangulation(3, 3), map=None)
    assert isinstance(mesh, LaplacianMesh)
    assert sorted(node.index for node in mesh.nodes) == list(range(9))
    assert len(mesh.facets) == len(regular_triangulation(3, 3))


def test_load_flat_grid_has_zero_laplacian_at_centre():
    vertices = _grid() + [(0.0, 0.0, 0.0)]
    mesh = load_laplacian_mesh(vertices, regular_triangulation(3, 3), map=None)
    centre = _centre(mesh)
    assert np.allclose(mesh.laplacian_coord(centre), 0.0, atol=1e-9)
    assert mesh.mean_curvature_initial(centre) == pytest.approx(0.0, abs=1e-9)


def test_load_mean_vector_keeps_rest_weights_after_motion():
    vertices = _grid() + [(0.0, 0.0, 0.0)]
    mesh = load_laplacian_mesh(vertices, regular_triangulation(3, 3), map=None)
    centre = _centre(mesh)
    before = mesh.mean_curvature_vector(centre)
    centre.set_position(1.0, 1.0, 1.0)
    after = mesh.mean_curvature_vector(centre)
    assert np.allclose(before, after)
    assert np.allclose(after, centre.initial_position)


def test_load_rejects_facet_with_missing_vertex():
    vertices = _grid() + [(0.0, 0.0, 0.0)]
    with pytest.raises(IndexError):
        load_laplacian_mesh(vertices, [(0, 1, 9)], map=None)


def test_create_embeds_map_points():
    point = (0.25, 0.25, 0.0)
    mesh = create_laplacian_mesh(_grid(), 3, 3, [point], map=None, keyframe="kf")
    assert mesh.keyframe == "kf"
    facet, barycentric = mesh.embeddings[point]
    assert point in facet.map_points
    assert sum(barycentric) == pytest.approx(1.0)
    assert sorted(node.index for node in facet.node_array) == [0, 1, 3]


def test_create_computes_laplacian_coordinates():
    mesh = create_laplacian_mesh(_grid(), 3, 3, [], map=None, keyframe=None)
    centre = _centre(mesh)
    assert len(mesh.nodes) == 9
    assert np.allclose(mesh.laplacian_coord(centre), 0.0, atol=1e-9)


def test_create_rejects_wrong_vertex_count():
    with pytest.raises(ValueError):
        create_laplacian_mesh(_grid()[:-1], 3, 3, [], map=None, keyframe=None)