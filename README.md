# deformesh

Deformable shape templates built from triangular meshes, with the geometry
needed to embed observed 3D points in them and to measure how they bend,
plus two point-cloud tools: normal estimation and smoothing.

## Modules

- `deformesh.node` — `Node`, a mesh vertex. It keeps its current and
  shape-at-rest positions (`position`, `initial_position`, `reset()`,
  `set_position()`), its edges and facets, its Laplacian `weights`, and a
  `Role` (`VIEWED`, `LOCAL`, `NONOBS`) set with `set_viewed()`,
  `set_local()` and `reset_role()`; `update()` refreshes the `viewed` and
  `local` flags from the role. `neighbours()` gives the nodes joined to it
  by an edge.
- `deformesh.edge` — `Edge`, linking two nodes and remembering its
  `initial_length`. An edge between two nodes the template already joins is
  left detached (`registered` is False).
- `deformesh.facet` — `Facet`, a triangle of three nodes; it creates the
  edges the template does not have yet and holds the map points observed on
  it. `compute_texture_coordinates(keyframe, pose, camera_matrix)` projects
  its nodes with a 4x4 `Tcw` pose and a 3x3 camera matrix, and takes its
  texture from the keyframe when all three projections fall strictly inside
  a 640x480 image; `Facet.textures_dataset` records which facets each
  keyframe textures.
- `deformesh.template` — `Template`, the container of nodes, edges, facets
  and embedded map points. `edge_median_length()` returns the median rest
  length of its edges (0.10 when it has none), `restart()` returns every node
  to rest, and `release()` detaches map points and drops all mesh elements.
- `deformesh.triangular_mesh` — `TriangularMesh`, built from a vertex list
  and triangle indices (the last vertex row is not turned into a node), or
  with `TriangularMesh.from_surface(vertices, rows, cols, map_points, map,
  keyframe)` from a regular grid of world-coordinate vertices, in which case
  map points are located in the facets that contain them (`embeddings`).
  `locate_point(point)` returns a facet and barycentric coordinates, and
  `compute_facet_textures(...)` textures every facet and returns how many
  succeeded. The helpers `regular_triangulation(rows, cols)` and
  `point_in_triangle(query, v0, v1, v2)` are usable on their own.
- `deformesh.laplacian_mesh` — `LaplacianMesh`, a triangular mesh that
  computes Laplacian weights and the rest Laplacian coordinates of every
  interior node (`laplacian_coords`). `laplacian_coord()` and
  `mean_curvature_initial()` describe the rest shape; `mean_curvature()` and
  `mean_curvature_vector()` use the current node positions with the rest
  weights.
- `deformesh.template_generator` — `load_laplacian_mesh(vertices, indices,
  map)` and `create_laplacian_mesh(vertices, rows, cols, map_points, map,
  keyframe)`.
- `deformesh.normals` — `estimate_normals(points, radius=0.3)` takes a flat
  `[x0, y0, z0, ...]` list or an (N, 3) array and returns an (N, 3) array of
  unit normals oriented towards the origin; points with fewer than three
  neighbours in the radius get NaN.
- `deformesh.smoothing` — `SmootherMLS(polynomial_order=2,
  search_radius=0.03)`. `smooth_point_cloud(points)` returns a
  `SmoothingResult` with the smoothed `points` and the input `indices` they
  come from (points with fewer than three neighbours are dropped).
  `remove_outliers_radius(points)` returns the indices of points with at
  least 20 other points within the search radius.
- `deformesh.settings` — cross-correlation matching constants and the
  `PARALLEL` and `ORBSLAM` switches.

Map points, maps and keyframes are treated as opaque objects. A map point
may offer `is_bad` (a flag or a method), `world_position` (a value or a
method) and `remove_template()`; the mesh uses them when present.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from deformesh.laplacian_mesh import LaplacianMesh
from deformesh.triangular_mesh import regular_triangulation

rows, cols = 4, 4
vertices = [[float(i), float(j), 0.0] for j in range(cols) for i in range(rows)]
vertices.append([0.0, 0.0, 0.0])  # the last row is not turned into a node
mesh = LaplacianMesh(vertices, regular_triangulation(rows, cols), map=None)

print(mesh.edge_median_length())
for node in mesh.nodes:
    if node in mesh.laplacian_coords:
        print(node.index, mesh.mean_curvature(node))
```

## What it does not do

The package works on geometry it is given. It does not estimate surfaces
from images, track cameras, match features, optimise mesh deformations or
draw anything: grid vertices, poses and camera matrices must come from the
caller, and there is no command-line program.