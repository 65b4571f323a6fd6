"""Triangular meshes that keep Laplacian coordinates (mean curvature) per node."""

from __future__ import annotations

import numpy as np

from deformesh.node import Node
from deformesh.triangular_mesh import TriangularMesh


def _vector(node: Node) -> np.ndarray:
    return np.array(node.position, dtype=float)


class LaplacianMesh(TriangularMesh):
    """A triangular mesh with the Laplacian coordinates of its shape at rest."""

    def _post_build(self) -> None:
        self.laplacian_coords: dict[Node, np.ndarray] = {}
        self.extract_mean_curvatures()

    def extract_mean_curvatures(self) -> None:
        """Compute cotangent-like weights and Laplacian coordinates of every node.

        Meant for irregular meshes. Neighbours sharing no neighbour with a
        node are removed; those sharing only one are marked as boundary.
        """
        for node in sorted(self.nodes, key=lambda n: n.index):
            neighbours = node.neighbours()
            ni = _vector(node)
            for neighbour in sorted(neighbours, key=lambda n: n.index):
                ring = sorted(
                    (n for n in neighbour.neighbours() if n in neighbours),
                    key=lambda n: n.index,
                )
                if not ring:
                    neighbour.set_bad_flag()
                    continue
                if len(ring) == 1:
                    neighbour.set_boundary()
                    continue
                node.ring[neighbour] = (ring[0], ring[1])
                nj = _vector(neighbour)
                nj_next = _vector(ring[0])
                nj_prev = _vector(ring[1])
                with np.errstate(divide="ignore", invalid="ignore"):
                    tan1 = np.linalg.norm(np.cross(nj_prev - ni, nj - ni)) / np.dot(
                        nj_prev - ni, nj - ni
                    )
                    tan2 = np.linalg.norm(np.cross(nj_next - ni, nj - ni)) / np.dot(
                        nj_next - ni, nj - ni
                    )
                    weight = (
                        np.tan(abs(np.arctan(tan1)) / 2) + np.tan(abs(np.arctan(tan2)) / 2)
                    ) / np.linalg.norm(ni - nj)
                node.weights[neighbour] = float(weight)

        for node in self.nodes:
            if node.boundary or len(node.neighbours()) <= 1:
                continue
            total, weight_sum = self._weighted_sum(node)
            with np.errstate(divide="ignore", invalid="ignore"):
                self.laplacian_coords[node] = _vector(node) - total / weight_sum

    @staticmethod
    def _weighted_sum(node: Node) -> tuple[np.ndarray, float]:
        total = np.zeros(3)
        weight_sum = 0.0
        for neighbour in node.neighbours():
            weight = node.weights.get(neighbour, 0.0)
            total = total + weight * _vector(neighbour)
            weight_sum += weight
        return total, weight_sum

    def laplacian_coord(self, node: Node) -> np.ndarray:
        """Laplacian coordinate (mean-curvature vector) of the node at rest."""
        return self.laplacian_coords[node].copy()

    def mean_curvature_initial(self, node: Node) -> float:
        """Norm of the node's Laplacian coordinate at rest."""
        return float(np.linalg.norm(self.laplacian_coords[node]))

    def mean_curvature(self, node: Node) -> float:
        """Current mean curvature, keeping the rest weights."""
        total, weight_sum = self._weighted_sum(node)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(np.linalg.norm(total)) / weight_sum)

    def mean_curvature_vector(self, node: Node) -> np.ndarray:
        """Current weighted mean of the neighbour positions, keeping the rest weights."""
        total, weight_sum = self._weighted_sum(node)
        with np.errstate(divide="ignore", invalid="ignore"):
            return total / weight_sum